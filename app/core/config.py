# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration — all env-driven, zero hardcode.
Single source of truth for every tunable parameter.
"""

import os


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "clan-key-reminder")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8080"))

    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./clan.db")

    CLAN_ID: str = os.getenv("CLAN_ID", "farbtonne5")
    CLAN_TIMEZONE: str = os.getenv("CLAN_TIMEZONE", "Europe/Berlin")

    REMINDER_INTERVAL_MINUTES: int = int(os.getenv("REMINDER_INTERVAL_MINUTES", "15"))
    SCHEDULER_ENABLED: bool = (
        os.getenv("SCHEDULER_ENABLED", "true").lower() == "true"
    )

    WEBHOOK_TIMEOUT: float = float(os.getenv("WEBHOOK_TIMEOUT", "10.0"))
    WEBHOOK_USERNAME: str = os.getenv("WEBHOOK_USERNAME", "Clan Key Reminder")

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
