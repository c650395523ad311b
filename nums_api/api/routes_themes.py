"""Public theme catalogue."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from nums_api.api.deps import optional_session
from nums_api.core.db_status import require_database
from nums_api.schemas import ThemeListResponse, ThemeResponse
from nums_api.services.auth import SessionIdentity
from nums_api.services.themes import list_themes
from nums_api.services.user_configs import find_active_theme_id

router = APIRouter(
    prefix="/themes",
    tags=["themes"],
    dependencies=[Depends(require_database)],
)


@router.get("", response_model=ThemeListResponse, summary="모든 테마 정보 조회")
def getThemes(
    identity: Optional[SessionIdentity] = Depends(optional_session),
) -> ThemeListResponse:
    """Anonymous callers get the catalogue; signed-in callers also their pick."""

    themes = [ThemeResponse.model_validate(theme) for theme in list_themes()]
    active_theme_id = find_active_theme_id(identity.user_id) if identity else None
    return ThemeListResponse(themes=themes, activeThemeId=active_theme_id)


__all__ = ["router"]
