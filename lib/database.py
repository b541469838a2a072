# =============================================================================
# lib/database.py - SQLAlchemy Engine and Session Factory
# =============================================================================
# Builds the engine and session factory for the relational store.
# There is no module-level engine: AppContext (app/context.py) owns one
# engine per application instance and disposes it on shutdown.
#
# Usage:
#   engine = create_db_engine(settings.DATABASE_URL)
#   SessionFactory = create_session_factory(engine)
#   with session_scope(SessionFactory) as db:
#       db.add(...)
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by every table in core/tables.py."""


def create_db_engine(url: str, connect_timeout: int = 10, echo: bool = False) -> Engine:
    """
    Create an engine for the configured database.

    SQLite needs cross-thread access because FastAPI runs sync handlers in
    a threadpool; in-memory SQLite additionally needs a single shared
    connection, otherwise every checkout sees an empty database.
    """
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": connect_timeout}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            return create_engine(url, echo=echo, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(url, echo=echo, connect_args=connect_args)

    return create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        connect_args={"connect_timeout": connect_timeout},
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create any missing tables."""
    # Import registers the mapped classes on Base.metadata
    import core.tables  # noqa: F401

    Base.metadata.create_all(engine)
    logger.info("Database schema ready")


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    """
    Provide a transactional scope around a series of operations.

    Commits on success, rolls back and re-raises on any error.
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
