"""Lottery draw (game) endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from nums_api.api.deps import require_admin
from nums_api.core.db_status import require_database
from nums_api.schemas import (
    GameDetailResponse,
    GameListResponse,
    GameResponse,
    GameUploadRequest,
    GameUploadResponse,
    IngestionErrorItem,
    IngestionResultItem,
    PaginationResponse,
)
from nums_api.services.auth import SessionIdentity
from nums_api.services.games import (
    get_game_by_round,
    get_recent_game,
    list_games,
    upload_game_data,
)

router = APIRouter(
    prefix="/games",
    tags=["games"],
    dependencies=[Depends(require_database)],
)


@router.post(
    "/upload",
    response_model=GameUploadResponse,
    response_model_exclude_none=True,
    summary="탭 구분 회차 데이터 업로드 (회차 기준 생성/갱신)",
)
def postGameUpload(
    payload: GameUploadRequest,
    _: SessionIdentity = Depends(require_admin),
) -> GameUploadResponse:
    outcome = upload_game_data(payload.data)
    return GameUploadResponse(
        message="로또 데이터 처리 완료",
        total=outcome.total,
        successCount=outcome.success_count,
        errorCount=outcome.error_count,
        results=[IngestionResultItem(**item) for item in outcome.results],
        errors=[IngestionErrorItem(**item) for item in outcome.errors] or None,
    )


@router.get(
    "",
    response_model=GameListResponse,
    response_model_exclude_none=True,
    summary="회차 데이터 목록 조회 (페이지네이션 또는 all=true)",
)
def getGames(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=1000),
    round_no: Optional[int] = Query(None, alias="round", gt=0),
    fetch_all: Optional[str] = Query(None, alias="all"),
) -> GameListResponse:
    listing = list_games(
        page=page,
        limit=limit,
        round_no=round_no,
        fetch_all=fetch_all in ("true", "1"),
    )
    pagination = listing.get("pagination")
    return GameListResponse(
        games=[GameResponse.model_validate(game) for game in listing["games"]],
        pagination=PaginationResponse(**pagination) if pagination else None,
        totalItems=listing.get("totalItems"),
    )


@router.get(
    "/recent",
    response_model=GameDetailResponse,
    summary="가장 최근(최대 회차) 데이터 조회",
)
def getRecentGame() -> GameDetailResponse:
    return GameDetailResponse(data=GameResponse.model_validate(get_recent_game()))


@router.get(
    "/{round_no}",
    response_model=GameDetailResponse,
    summary="특정 회차 데이터 조회",
)
def getGameByRound(
    round_no: int = Path(..., gt=0, description="조회할 회차, e.g., 600."),
) -> GameDetailResponse:
    return GameDetailResponse(data=GameResponse.model_validate(get_game_by_round(round_no)))


__all__ = ["router"]
