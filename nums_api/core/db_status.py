"""Process-wide, advisory "is the store reachable" state."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Request

from nums_api.core.db import init_database, ping_database
from nums_api.core.errors import UnavailableError

logger = logging.getLogger(__name__)


class DatabaseStatus:
    """Connectivity flag owned by the connection-management routine.

    Only :meth:`initialize`, :meth:`check` and :meth:`set_connected` write the
    flag; request handlers just read it.
    """

    _connected: bool = False
    _schema_ready: bool = False

    @classmethod
    def is_connected(cls) -> bool:
        return cls._connected

    @classmethod
    def set_connected(cls, status: bool) -> None:
        if status != cls._connected:
            logger.info(
                "DB status updated: %s", "connected" if status else "disconnected"
            )
        cls._connected = status

    @classmethod
    def initialize(cls) -> bool:
        """Create tables and mark the store reachable, or record the failure."""

        try:
            init_database()
        except Exception:  # noqa: BLE001  # start degraded, the poller may recover
            logger.exception("Database initialization failed")
            cls.set_connected(False)
            return False
        cls._schema_ready = True
        cls.set_connected(True)
        return True

    @classmethod
    def check(cls) -> bool:
        """Probe the store once and update the flag accordingly."""

        if not cls._schema_ready:
            return cls.initialize()
        try:
            ping_database()
        except Exception as exc:  # noqa: BLE001  # advisory probe only
            logger.warning("Database ping failed: %s", exc)
            cls.set_connected(False)
            return False
        cls.set_connected(True)
        return True

    @classmethod
    def reset(cls) -> None:
        cls._connected = False
        cls._schema_ready = False


def require_database(request: Request) -> None:
    """FastAPI dependency short-circuiting store routes while disconnected."""

    if DatabaseStatus.is_connected():
        return
    raise UnavailableError(
        "This endpoint requires an active database connection. "
        "Please ensure the database is running.",
        "DB_UNAVAILABLE",
        {
            "error": "Database Unavailable",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoint": request.url.path,
            "method": request.method,
        },
    )


__all__ = ["DatabaseStatus", "require_database"]
