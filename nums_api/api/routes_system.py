"""System category endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from nums_api.core.config import get_settings
from nums_api.core.db import get_engine, ping_database
from nums_api.core.db_status import DatabaseStatus
from nums_api.core.errors import UnavailableError
from nums_api.schemas import DatabaseHealth, HealthResponse, StorageHealthResponse

router = APIRouter(tags=["system"])


@router.get("/health", response_model=HealthResponse)
def getHealth() -> HealthResponse:
    """Liveness probe; answers even while the store is down."""

    connected = DatabaseStatus.is_connected()
    return HealthResponse(
        message="Server is healthy",
        timestamp=datetime.now(timezone.utc),
        environment=get_settings().app_env,
        database=DatabaseHealth(
            status="connected" if connected else "disconnected",
            type="SQLAlchemy",
        ),
    )


@router.get(
    "/storage",
    response_model=StorageHealthResponse,
    summary="저장소 연결 상태 확인",
)
def getStorageHealth() -> StorageHealthResponse:
    """실제 왕복 쿼리로 데이터베이스 연결 여부를 확인."""

    try:
        backend = get_engine().dialect.name
        _, total = ping_database()
    except Exception as exc:  # noqa: BLE001  # surface the message to the client
        raise UnavailableError(
            f"데이터베이스 연결 실패: {exc}", "DB_UNAVAILABLE"
        ) from exc

    return StorageHealthResponse(
        backend=backend,
        connected=True,
        message="데이터베이스 연결 성공",
        total_draws=total,
    )


__all__ = ["router"]
