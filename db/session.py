"""
db/session.py

Engine and session plumbing for the sitio store.
"""

from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from db.config import DatabaseSettings, get_database_settings


def create_db_engine(database_url: str | None = None) -> Engine:
    settings = get_database_settings()
    if database_url:
        settings = DatabaseSettings(url=database_url, echo=settings.echo)

    if settings.is_sqlite:
        # Request handlers run in FastAPI's threadpool.
        return create_engine(settings.url, echo=settings.echo, connect_args={"check_same_thread": False})
    return create_engine(settings.url, echo=settings.echo, pool_pre_ping=True)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return create_db_engine()


@lru_cache(maxsize=1)
def _session_factory() -> sessionmaker:
    return sessionmaker(bind=get_engine(), autoflush=False, expire_on_commit=False)


def SessionLocal() -> Session:
    """Open a session on the shared engine."""
    return _session_factory()()


def init_db(engine: Engine | None = None) -> None:
    """Create the sitio tables that do not exist yet."""
    import db.models  # noqa: F401
    from db.base import Base

    Base.metadata.create_all(bind=engine or get_engine())


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
