"""Account endpoints: registration, login and self-service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, status

from nums_api.api.deps import require_session
from nums_api.core.db_status import require_database
from nums_api.core.errors import ValidationError
from nums_api.schemas import (
    LoginResponse,
    MeResponse,
    MessageResponse,
    MyThemesResponse,
    ProfileMutationResponse,
    ProfileResponse,
    ProfileUpdateRequest,
    RegisterResponse,
    ThemeResponse,
    ThemeSelectRequest,
    ThemeSelectResponse,
    UserConfigResponse,
    UserCredentialsRequest,
    UserDetailResponse,
    UserListResponse,
    UserResponse,
    UserUpdateResponse,
)
from nums_api.services.auth import SessionIdentity
from nums_api.services.profiles import update_profile
from nums_api.services.user_configs import get_theme_selection, select_theme
from nums_api.services.users import (
    delete_account,
    get_me,
    get_user,
    list_users,
    login_user,
    register_user,
    update_account,
)

router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(require_database)],
)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="회원가입 (계정 + 기본 프로필 생성)",
)
def postRegister(payload: UserCredentialsRequest) -> RegisterResponse:
    account, profile = register_user(payload.username, payload.password)
    return RegisterResponse(
        message="회원가입이 완료되었습니다.",
        user=UserResponse.model_validate(account),
        profile=ProfileResponse.model_validate(profile),
    )


@router.post("/login", response_model=LoginResponse, summary="로그인 및 토큰 발급")
def postLogin(payload: UserCredentialsRequest) -> LoginResponse:
    token, account = login_user(payload.username, payload.password)
    return LoginResponse(
        message="로그인이 완료되었습니다.",
        token=token,
        user=UserResponse.model_validate(account),
    )


@router.get("", response_model=UserListResponse, summary="사용자 목록 조회")
def getUsers(_: SessionIdentity = Depends(require_session)) -> UserListResponse:
    return UserListResponse(
        users=[UserResponse.model_validate(account) for account in list_users()]
    )


@router.get("/me", response_model=MeResponse, summary="본인 정보 조회")
def getMe(identity: SessionIdentity = Depends(require_session)) -> MeResponse:
    profile, active_theme = get_me(identity.user_id)
    return MeResponse(
        profile=ProfileResponse.model_validate(profile),
        activeTheme=active_theme,
    )


@router.put("/me", response_model=ProfileMutationResponse, summary="본인 프로필 수정")
def putMe(
    payload: ProfileUpdateRequest,
    identity: SessionIdentity = Depends(require_session),
) -> ProfileMutationResponse:
    profile = update_profile(
        identity.user_id,
        nickname=payload.nickname,
        level=payload.level,
        experience=payload.experience,
    )
    return ProfileMutationResponse(
        message="프로필 정보가 수정되었습니다.",
        profile=ProfileResponse.model_validate(profile),
    )


@router.put(
    "/me/account",
    response_model=UserUpdateResponse,
    summary="본인 사용자명 / 비밀번호 변경",
)
def putMyAccount(
    payload: UserCredentialsRequest,
    identity: SessionIdentity = Depends(require_session),
) -> UserUpdateResponse:
    account = update_account(
        identity.user_id,
        username=payload.username,
        password=payload.password,
    )
    return UserUpdateResponse(
        message="계정 정보가 수정되었습니다.",
        user=UserResponse.model_validate(account),
    )


@router.delete("/me", response_model=MessageResponse, summary="본인 계정 및 모든 데이터 삭제")
def deleteMe(identity: SessionIdentity = Depends(require_session)) -> MessageResponse:
    delete_account(identity.user_id)
    return MessageResponse(message="계정과 모든 관련 데이터가 삭제되었습니다.")


@router.get("/me/themes", response_model=MyThemesResponse, summary="본인 테마 정보 조회")
def getMyThemes(identity: SessionIdentity = Depends(require_session)) -> MyThemesResponse:
    available, active = get_theme_selection(identity.user_id)
    return MyThemesResponse(
        availableThemes=[ThemeResponse.model_validate(theme) for theme in available],
        activeTheme=ThemeResponse.model_validate(active) if active else None,
    )


@router.put("/me/themes", response_model=ThemeSelectResponse, summary="본인 테마 변경")
def putMyTheme(
    payload: ThemeSelectRequest,
    identity: SessionIdentity = Depends(require_session),
) -> ThemeSelectResponse:
    theme_id = payload.theme_id
    if isinstance(theme_id, bool) or not isinstance(theme_id, int) or theme_id <= 0:
        raise ValidationError("유효한 theme_id가 필요합니다.", "INVALID_THEME_ID")

    config = select_theme(identity.user_id, theme_id)
    return ThemeSelectResponse(
        message="테마가 성공적으로 변경되었습니다.",
        userConfig=UserConfigResponse.model_validate(config),
    )


@router.get("/{user_id}", response_model=UserDetailResponse, summary="특정 사용자 조회")
def getUserById(
    user_id: int = Path(..., gt=0),
    _: SessionIdentity = Depends(require_session),
) -> UserDetailResponse:
    return UserDetailResponse(user=UserResponse.model_validate(get_user(user_id)))


__all__ = ["router"]
