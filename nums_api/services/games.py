"""Draw record ingestion and lookup services."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select

from nums_api.core.db import session_scope
from nums_api.core.error_handlers import translate_store_error
from nums_api.core.errors import AppError, NotFoundError, ValidationError
from nums_api.models.tables import GameORM
from nums_api.services.game_parser import DrawRecord, parse_game_data

logger = logging.getLogger(__name__)

STATUS_CREATED = "created"
STATUS_UPDATED = "updated"


@dataclass
class IngestionResult:
    """Per-batch accounting of an upload run."""

    total: int
    results: List[Dict[str, Any]] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.results)

    @property
    def error_count(self) -> int:
        return len(self.errors)


def _upsert_record(record: DrawRecord) -> str:
    """Create or fully replace the stored draw for ``record.round``."""

    values = record.as_dict()
    with session_scope() as session:
        existing = session.scalars(
            select(GameORM).where(GameORM.round == record.round)
        ).first()
        if existing is None:
            session.add(GameORM(**values))
            return STATUS_CREATED
        for name, value in values.items():
            setattr(existing, name, value)
        return STATUS_UPDATED


def upload_game_data(data: Any) -> IngestionResult:
    """Parse ``data`` and upsert every record, isolating per-record failures."""

    if not isinstance(data, str) or not data:
        raise ValidationError(
            "데이터가 필요합니다. 문자열 형태로 전달해주세요.",
            "INVALID_REQUEST_BODY",
        )

    records = parse_game_data(data)
    if not records:
        raise ValidationError("파싱할 수 있는 데이터가 없습니다.", "PARSED_DATA_EMPTY")

    outcome = IngestionResult(total=len(records))
    for record in records:
        try:
            status = _upsert_record(record)
        except Exception as exc:  # noqa: BLE001  # recorded per round, batch continues
            logger.warning("Failed to store round %s", record.round, exc_info=exc)
            error = exc if isinstance(exc, AppError) else translate_store_error(exc)
            outcome.errors.append({"round": record.round, "error": error.message})
            continue

        message = (
            "새 데이터가 생성되었습니다."
            if status == STATUS_CREATED
            else "기존 데이터가 업데이트되었습니다."
        )
        outcome.results.append(
            {"round": record.round, "status": status, "message": message}
        )

    logger.info(
        "Game upload processed (total=%s success=%s errors=%s)",
        outcome.total,
        outcome.success_count,
        outcome.error_count,
    )
    return outcome


def list_games(
    page: int = 1,
    limit: int = 10,
    round_no: Optional[int] = None,
    fetch_all: bool = False,
) -> Dict[str, Any]:
    """List draws newest first, either paged or in full."""

    query = select(GameORM).order_by(GameORM.round.desc())
    count_query = select(func.count()).select_from(GameORM)
    if round_no is not None:
        query = query.where(GameORM.round == round_no)
        count_query = count_query.where(GameORM.round == round_no)

    with session_scope() as session:
        if fetch_all:
            rows = list(session.scalars(query).all())
            return {"games": rows, "totalItems": len(rows)}

        total = int(session.scalar(count_query) or 0)
        rows = list(
            session.scalars(query.limit(limit).offset((page - 1) * limit)).all()
        )

    return {
        "games": rows,
        "pagination": {
            "currentPage": page,
            "totalPages": math.ceil(total / limit),
            "totalItems": total,
            "itemsPerPage": limit,
        },
    }


def get_game_by_round(round_no: int) -> GameORM:
    with session_scope() as session:
        game = session.scalars(
            select(GameORM).where(GameORM.round == round_no)
        ).first()
    if game is None:
        raise NotFoundError(
            "해당 회차의 로또 데이터를 찾을 수 없습니다.", "GAME_NOT_FOUND"
        )
    return game


def get_recent_game() -> GameORM:
    """Return the draw with the highest round."""

    with session_scope() as session:
        game = session.scalars(
            select(GameORM).order_by(GameORM.round.desc())
        ).first()
    if game is None:
        raise NotFoundError("로또 데이터가 존재하지 않습니다.", "GAME_NOT_FOUND")
    return game


def get_recent_game_status(
    threshold_days: int,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Report whether the newest stored draw is within ``threshold_days``.

    Draw dates are local calendar dates, so elapsed days are counted against
    the server-local clock.
    """

    game = get_recent_game()
    now = now or datetime.now().astimezone()
    days_elapsed = (now.date() - game.draw_date).days
    return {
        "round": game.round,
        "drawDate": game.draw_date,
        "daysElapsed": days_elapsed,
        "thresholdDays": threshold_days,
        "isUpToDate": days_elapsed <= threshold_days,
        "serverNow": now,
        "game": game,
    }


__all__ = [
    "IngestionResult",
    "upload_game_data",
    "list_games",
    "get_game_by_round",
    "get_recent_game",
    "get_recent_game_status",
]
