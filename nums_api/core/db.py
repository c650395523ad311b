"""Relational store connection helpers built on SQLAlchemy."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Generator

from sqlalchemy import create_engine, event, func, select, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from nums_api.core.config import get_settings


class Base(DeclarativeBase):
    """Declarative base shared by the SQLAlchemy models."""


_engine: Engine | None = None
_session_factory: sessionmaker | None = None


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_store_engine(dsn: str, connect_timeout: int) -> Engine:
    """Build an engine that fails fast when the store is unreachable."""

    url = make_url(dsn)
    if url.get_backend_name() == "sqlite":
        options: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
        engine = create_engine(url, future=True, **options)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_timeout=connect_timeout,
        connect_args={"connect_timeout": connect_timeout},
        future=True,
    )


def _initialize_engine() -> None:
    """Instantiate the singleton engine/session factory if needed."""

    global _engine, _session_factory  # noqa: PLW0603  # module-level cache
    if _engine is not None and _session_factory is not None:
        return

    settings = get_settings()
    engine = create_store_engine(settings.database_dsn, settings.db_connect_timeout)
    _engine = engine
    _session_factory = sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
    )


def get_engine() -> Engine:
    """Return the singleton SQLAlchemy engine."""

    _initialize_engine()
    assert _engine is not None  # narrow type for mypy/pyright
    return _engine


def get_session() -> Session:
    """Return a new Session bound to the global engine."""

    _initialize_engine()
    assert _session_factory is not None
    return _session_factory()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Provide a transactional scope for DB operations."""

    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:  # noqa: BLE001  # bubble up after rollback
        session.rollback()
        raise
    finally:
        session.close()


def init_database() -> None:
    """Create every registered table that does not exist yet."""

    # Import models so their metadata is registered before create_all.
    from nums_api.models import tables  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def ping_database() -> tuple[bool, int]:
    """Run a lightweight round trip and report the stored draw count."""

    from nums_api.models.tables import GameORM

    with session_scope() as session:
        session.execute(text("SELECT 1"))
        total = session.scalar(select(func.count()).select_from(GameORM))
    return True, int(total or 0)


def dispose_engine() -> None:
    """Drop pooled connections; the next call rebuilds the engine."""

    global _engine, _session_factory  # noqa: PLW0603
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


__all__ = [
    "Base",
    "create_store_engine",
    "get_engine",
    "get_session",
    "session_scope",
    "init_database",
    "ping_database",
    "dispose_engine",
]
