"""User config endpoints; every account may only touch its own config."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, status

from nums_api.api.deps import require_owner, require_session
from nums_api.core.db_status import require_database
from nums_api.schemas import (
    MessageResponse,
    ThemeResponse,
    UserConfigDetailResponse,
    UserConfigMutationResponse,
    UserConfigRequest,
    UserConfigResponse,
)
from nums_api.services.auth import SessionIdentity
from nums_api.services.user_configs import (
    create_user_config,
    delete_user_config,
    get_user_config,
    update_user_config,
)

router = APIRouter(
    prefix="/user-configs",
    tags=["configs"],
    dependencies=[Depends(require_database)],
)


@router.get("/{user_id}", response_model=UserConfigDetailResponse, summary="사용자 설정 조회")
def getUserConfig(
    user_id: int = Path(..., gt=0),
    identity: SessionIdentity = Depends(require_session),
) -> UserConfigDetailResponse:
    require_owner(user_id, identity)
    config, theme = get_user_config(user_id)
    return UserConfigDetailResponse(
        config=UserConfigResponse.model_validate(config),
        theme=ThemeResponse.model_validate(theme) if theme else None,
    )


@router.post(
    "",
    response_model=UserConfigMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="사용자 설정 생성",
)
def postUserConfig(
    payload: UserConfigRequest,
    identity: SessionIdentity = Depends(require_session),
) -> UserConfigMutationResponse:
    config = create_user_config(identity.user_id, payload.active_theme)
    return UserConfigMutationResponse(
        message="사용자 설정이 생성되었습니다.",
        config=UserConfigResponse.model_validate(config),
    )


@router.put("/{user_id}", response_model=UserConfigMutationResponse, summary="사용자 설정 수정")
def putUserConfig(
    payload: UserConfigRequest,
    user_id: int = Path(..., gt=0),
    identity: SessionIdentity = Depends(require_session),
) -> UserConfigMutationResponse:
    require_owner(user_id, identity)
    config = update_user_config(user_id, payload.active_theme)
    return UserConfigMutationResponse(
        message="사용자 설정이 수정되었습니다.",
        config=UserConfigResponse.model_validate(config),
    )


@router.delete("/{user_id}", response_model=MessageResponse, summary="사용자 설정 삭제")
def deleteUserConfig(
    user_id: int = Path(..., gt=0),
    identity: SessionIdentity = Depends(require_session),
) -> MessageResponse:
    require_owner(user_id, identity)
    delete_user_config(user_id)
    return MessageResponse(message="사용자 설정이 삭제되었습니다.")


__all__ = ["router"]
