# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""SQLAlchemy engine singleton."""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from app.core.config import settings


def build_engine(url: str) -> Engine:
    """Create an engine; in-memory SQLite shares one connection across threads."""
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True, pool_recycle=300)


engine = build_engine(settings.DATABASE_URL)
