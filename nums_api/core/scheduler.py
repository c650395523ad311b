"""Background scheduler polling store connectivity."""

from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from nums_api.core.config import get_settings
from nums_api.core.db_status import DatabaseStatus

logger = logging.getLogger(__name__)

RECONNECT_JOB_ID = "database_reconnect"

_scheduler: AsyncIOScheduler | None = None


def _check_database() -> None:
    """Refresh the connectivity flag; never let the job die."""

    try:
        DatabaseStatus.check()
    except Exception:  # noqa: BLE001  # log but keep scheduler alive
        logger.exception("Database connectivity check failed")


def start_scheduler() -> bool:
    """Start the reconnect poll when enabled; returns whether it runs."""

    global _scheduler  # noqa: PLW0603
    if _scheduler is not None and _scheduler.running:
        return True

    settings = get_settings()
    if not settings.db_reconnect_enabled:
        logger.debug("Database reconnect poll disabled.")
        return False

    interval = max(1, settings.db_reconnect_interval_seconds)
    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        _check_database,
        trigger=IntervalTrigger(seconds=interval),
        id=RECONNECT_JOB_ID,
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    scheduler.start()
    _scheduler = scheduler
    logger.info("Database reconnect poll scheduled every %ss", interval)
    return True


def stop_scheduler() -> None:
    """Cancel the poll on application exit."""

    global _scheduler  # noqa: PLW0603
    if _scheduler is None:
        return
    _scheduler.shutdown(wait=False)
    _scheduler = None


__all__ = ["start_scheduler", "stop_scheduler"]
