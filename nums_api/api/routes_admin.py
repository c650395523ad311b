"""Administrator endpoints: account moderation, theme catalogue, data freshness."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, status

from nums_api.api.deps import require_admin
from nums_api.core.config import get_settings
from nums_api.core.db_status import require_database
from nums_api.schemas import (
    AdminUserUpdateRequest,
    GameResponse,
    MessageResponse,
    RecentGameStatusResponse,
    ThemeCreateRequest,
    ThemeDetailResponse,
    ThemeListResponse,
    ThemeResponse,
    ThemeUpdateRequest,
    UserDetailResponse,
    UserListResponse,
    UserResponse,
    UserUpdateResponse,
)
from nums_api.services.admin import (
    delete_admin_user,
    get_admin_user,
    list_admin_users,
    update_admin_user,
)
from nums_api.services.games import get_recent_game_status
from nums_api.services.themes import (
    create_theme,
    delete_theme,
    get_theme,
    list_themes,
    update_theme,
)

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_database), Depends(require_admin)],
)


@router.get("/users", response_model=UserListResponse, summary="[관리자] 전체 사용자 조회")
def getAdminUsers() -> UserListResponse:
    return UserListResponse(
        users=[UserResponse.model_validate(account) for account in list_admin_users()]
    )


@router.get(
    "/users/{user_id}",
    response_model=UserDetailResponse,
    summary="[관리자] 특정 사용자 조회",
)
def getAdminUser(user_id: int = Path(..., gt=0)) -> UserDetailResponse:
    return UserDetailResponse(user=UserResponse.model_validate(get_admin_user(user_id)))


@router.put(
    "/users/{user_id}",
    response_model=UserUpdateResponse,
    summary="[관리자] 사용자명 / 활성 상태 변경",
)
def putAdminUser(
    payload: AdminUserUpdateRequest,
    user_id: int = Path(..., gt=0),
) -> UserUpdateResponse:
    account = update_admin_user(
        user_id,
        username=payload.username,
        is_active=payload.is_active,
    )
    return UserUpdateResponse(
        message="사용자 정보가 수정되었습니다.",
        user=UserResponse.model_validate(account),
    )


@router.delete(
    "/users/{user_id}",
    response_model=MessageResponse,
    summary="[관리자] 사용자 및 관련 데이터 삭제",
)
def deleteAdminUser(user_id: int = Path(..., gt=0)) -> MessageResponse:
    delete_admin_user(user_id)
    return MessageResponse(message="사용자와 모든 관련 데이터가 삭제되었습니다.")


@router.get("/themes", response_model=ThemeListResponse, summary="[관리자] 테마 목록 조회")
def getAdminThemes() -> ThemeListResponse:
    return ThemeListResponse(
        themes=[ThemeResponse.model_validate(theme) for theme in list_themes()]
    )


@router.get(
    "/themes/{theme_id}",
    response_model=ThemeDetailResponse,
    summary="[관리자] 특정 테마 조회",
)
def getAdminTheme(theme_id: int = Path(..., gt=0)) -> ThemeDetailResponse:
    return ThemeDetailResponse(theme=ThemeResponse.model_validate(get_theme(theme_id)))


@router.post(
    "/themes",
    response_model=ThemeDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="[관리자] 테마 생성",
)
def postAdminTheme(payload: ThemeCreateRequest) -> ThemeDetailResponse:
    theme = create_theme(
        name=payload.name,
        mode=payload.mode,
        colors=payload.colors,
        variables=payload.variables,
        is_default=payload.is_default,
        name_kr=payload.name_kr,
    )
    return ThemeDetailResponse(
        message="테마가 생성되었습니다.",
        theme=ThemeResponse.model_validate(theme),
    )


@router.put(
    "/themes/{theme_id}",
    response_model=ThemeDetailResponse,
    summary="[관리자] 테마 수정",
)
def putAdminTheme(
    payload: ThemeUpdateRequest,
    theme_id: int = Path(..., gt=0),
) -> ThemeDetailResponse:
    theme = update_theme(theme_id, payload.model_dump(exclude_unset=True))
    return ThemeDetailResponse(
        message="테마가 수정되었습니다.",
        theme=ThemeResponse.model_validate(theme),
    )


@router.delete(
    "/themes/{theme_id}",
    response_model=MessageResponse,
    summary="[관리자] 테마 삭제",
)
def deleteAdminTheme(theme_id: int = Path(..., gt=0)) -> MessageResponse:
    delete_theme(theme_id)
    return MessageResponse(message="테마가 삭제되었습니다.")


@router.get(
    "/games/recent-status",
    response_model=RecentGameStatusResponse,
    summary="[관리자] 최신 회차 데이터 신선도 확인",
)
def getRecentGameStatus() -> RecentGameStatusResponse:
    report = get_recent_game_status(get_settings().game_recent_threshold_days)
    game = GameResponse.model_validate(report.pop("game"))
    return RecentGameStatusResponse(game=game, **report)


__all__ = ["router"]
