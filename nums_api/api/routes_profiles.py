"""User profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from nums_api.api.deps import require_session
from nums_api.core.db_status import require_database
from nums_api.schemas import ProfileCreateRequest, ProfileMutationResponse, ProfileResponse
from nums_api.services.auth import SessionIdentity
from nums_api.services.profiles import create_profile

router = APIRouter(
    prefix="/user-profiles",
    tags=["profiles"],
    dependencies=[Depends(require_database)],
)


@router.post(
    "",
    response_model=ProfileMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="본인 프로필 생성",
)
def postUserProfile(
    payload: ProfileCreateRequest,
    identity: SessionIdentity = Depends(require_session),
) -> ProfileMutationResponse:
    profile = create_profile(
        identity.user_id,
        nickname=payload.nickname,
        level=payload.level,
        experience=payload.experience,
    )
    return ProfileMutationResponse(
        message="사용자 프로필이 생성되었습니다.",
        profile=ProfileResponse.model_validate(profile),
    )


__all__ = ["router"]
