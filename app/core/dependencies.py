# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire repositories and services.
"""

from app.core.database import engine
from app.repositories.document_store import DocumentStore
from app.repositories.member_repository import MemberRepository
from app.repositories.settings_repository import SettingsRepository
from app.services.key_update_service import KeyUpdateService
from app.services.reminder_scheduler import ReminderScheduler
from app.services.webhook_dispatcher import WebhookDispatcher

# ── Singleton repository instances ──
_store = DocumentStore(engine)
_settings_repo = SettingsRepository(_store)
_member_repo = MemberRepository(_store)
_dispatcher = WebhookDispatcher()

# ── Service instances (with injected dependencies) ──
_reminder_scheduler = ReminderScheduler(
    settings_repo=_settings_repo,
    member_repo=_member_repo,
    dispatcher=_dispatcher,
)
_key_update_service = KeyUpdateService(member_repo=_member_repo)


# ── FastAPI dependency functions ──
def get_document_store() -> DocumentStore:
    return _store


def get_settings_repo() -> SettingsRepository:
    return _settings_repo


def get_member_repo() -> MemberRepository:
    return _member_repo


def get_reminder_scheduler() -> ReminderScheduler:
    return _reminder_scheduler


def get_key_update_service() -> KeyUpdateService:
    return _key_update_service
