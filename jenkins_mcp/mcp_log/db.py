"""MCP Log database engine and session management."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import get_config

_engine: Optional[Engine] = None


def get_engine(database_url: Optional[str] = None) -> Engine:
    """Get or create the SQLAlchemy engine.

    Args:
        database_url: Optional override for the database URL.
                     If not provided, uses config.

    Returns:
        SQLAlchemy Engine instance.
    """
    global _engine

    if database_url is None:
        database_url = get_config().database_url

    if _engine is not None and _engine.url.render_as_string(hide_password=False) == database_url:
        return _engine

    kwargs = {"echo": False, "pool_pre_ping": True}
    if database_url.startswith("sqlite:"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # In-memory databases live only as long as their single connection.
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    if _engine is not None:
        _engine.dispose()
    _engine = create_engine(database_url, **kwargs)
    return _engine


def get_session(database_url: Optional[str] = None) -> Session:
    """Create a new database session."""
    SessionLocal = sessionmaker(
        bind=get_engine(database_url),
        autoflush=False,
        expire_on_commit=False,
    )
    return SessionLocal()


def dispose_engine() -> None:
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = None
