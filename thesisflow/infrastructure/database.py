"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from thesisflow.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict[str, object]:
    """Return ``create_engine`` keyword arguments suited to ``database_url``."""

    options: dict[str, object] = {"pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        # FastAPI runs sync endpoints on a worker thread pool.
        options["connect_args"] = {"check_same_thread": False}
    return options


def build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for the configured database."""

    return create_engine(settings.database_url, **_engine_options(settings.database_url))


engine = build_engine(get_settings())
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database() -> None:
    """Ensure all ORM models have corresponding database tables."""

    from thesisflow.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.debug("Database schema ensured for %s", engine.url.render_as_string(hide_password=True))


def get_db() -> Generator[Session, None, None]:
    """Yield a database session, rolling back uncommitted work on errors."""

    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
