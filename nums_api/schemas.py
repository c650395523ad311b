"""Pydantic schemas shared by the FastAPI endpoints."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    success: bool = Field(True, description="요청 처리 성공 여부")
    message: str = Field(..., description="처리 결과 메시지")


# ---------------------------------------------------------------------------
# System
# ---------------------------------------------------------------------------


class DatabaseHealth(BaseModel):
    status: str = Field(..., description="connected 또는 disconnected")
    type: str = Field(..., description="저장소 종류")


class HealthResponse(BaseModel):
    success: bool = True
    message: str = Field(..., description="서버 상태 메시지")
    timestamp: datetime
    environment: str = Field(..., description="실행 환경 (NUMS_ENV)")
    database: DatabaseHealth


class StorageHealthResponse(BaseModel):
    backend: str = Field(..., description="SQLAlchemy 드라이버 이름")
    connected: bool = Field(..., description="저장소 연결 성공 여부")
    message: str = Field(..., description="상세 상태 메시지")
    total_draws: int | None = Field(None, description="저장된 회차 수")


# ---------------------------------------------------------------------------
# Games
# ---------------------------------------------------------------------------


class GameResponse(ORMModel):
    game_id: int
    round: int = Field(..., description="회차")
    draw_date: date = Field(..., description="추첨일")
    first_prize_winners: int
    first_prize_amount: int
    second_prize_winners: int
    second_prize_amount: int
    third_prize_winners: int
    third_prize_amount: int
    fourth_prize_winners: int
    fourth_prize_amount: int
    fifth_prize_winners: int
    fifth_prize_amount: int
    number1: int
    number2: int
    number3: int
    number4: int
    number5: int
    number6: int
    bonus_number: int = Field(..., description="보너스 번호")
    created_at: datetime | None = None
    updated_at: datetime | None = None


class GameUploadRequest(BaseModel):
    # Left untyped so a non-string payload reaches the service check.
    data: Any = Field(None, description="탭으로 구분된 19개 컬럼의 회차 데이터 (줄바꿈 구분)")


class IngestionResultItem(BaseModel):
    round: int
    status: str = Field(..., description="created 또는 updated")
    message: str


class IngestionErrorItem(BaseModel):
    round: int
    error: str


class GameUploadResponse(BaseModel):
    success: bool = True
    message: str
    total: int = Field(..., description="파싱된 회차 수")
    successCount: int
    errorCount: int
    results: List[IngestionResultItem]
    errors: Optional[List[IngestionErrorItem]] = Field(
        None, description="저장에 실패한 회차 (없으면 생략)"
    )


class PaginationResponse(BaseModel):
    currentPage: int
    totalPages: int
    totalItems: int
    itemsPerPage: int


class GameListResponse(BaseModel):
    success: bool = True
    games: List[GameResponse]
    pagination: Optional[PaginationResponse] = None
    totalItems: Optional[int] = Field(None, description="all 모드일 때 전체 개수")


class GameDetailResponse(BaseModel):
    success: bool = True
    data: GameResponse


class RecentGameStatusResponse(BaseModel):
    success: bool = True
    round: int
    drawDate: date
    daysElapsed: int = Field(..., description="최근 추첨일로부터 경과 일수")
    thresholdDays: int = Field(..., description="최신 상태로 판단하는 기준 일수")
    isUpToDate: bool
    serverNow: datetime
    game: GameResponse


# ---------------------------------------------------------------------------
# Users / profiles
# ---------------------------------------------------------------------------


class UserCredentialsRequest(BaseModel):
    username: Optional[str] = Field(None, description="3~50자 영문, 숫자, 밑줄")
    password: Optional[str] = Field(None, description="최소 6자")


class UserResponse(ORMModel):
    user_id: int
    username: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileResponse(ORMModel):
    user_id: int
    nickname: str
    level: int
    experience: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RegisterResponse(BaseModel):
    success: bool = True
    message: str
    user: UserResponse
    profile: ProfileResponse


class LoginResponse(BaseModel):
    success: bool = True
    message: str
    token: str = Field(..., description="Bearer 액세스 토큰")
    user: UserResponse


class UserListResponse(BaseModel):
    success: bool = True
    users: List[UserResponse]


class UserDetailResponse(BaseModel):
    success: bool = True
    user: UserResponse


class UserUpdateResponse(BaseModel):
    success: bool = True
    message: str
    user: UserResponse


class MeResponse(BaseModel):
    success: bool = True
    profile: ProfileResponse
    activeTheme: Optional[int] = Field(None, description="활성 테마 ID")


class ProfileCreateRequest(BaseModel):
    nickname: Optional[str] = None
    level: Optional[int] = None
    experience: Optional[int] = None


class ProfileUpdateRequest(BaseModel):
    nickname: Optional[str] = None
    level: Optional[int] = None
    experience: Optional[int] = None


class ProfileMutationResponse(BaseModel):
    success: bool = True
    message: str
    profile: ProfileResponse


class AdminUserUpdateRequest(BaseModel):
    username: Optional[str] = None
    is_active: Optional[bool] = None


# ---------------------------------------------------------------------------
# Themes / configs
# ---------------------------------------------------------------------------


class ThemeResponse(ORMModel):
    theme_id: int
    name: str
    name_kr: Optional[str] = None
    mode: str
    colors: Dict[str, Any]
    variables: Optional[Any] = None
    is_default: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ThemeListResponse(BaseModel):
    success: bool = True
    themes: List[ThemeResponse]
    activeThemeId: Optional[int] = Field(
        None, description="인증된 요청일 때 사용자의 활성 테마 ID"
    )


class ThemeDetailResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    theme: ThemeResponse


class ThemeCreateRequest(BaseModel):
    name: Optional[str] = None
    name_kr: Optional[str] = None
    mode: Optional[str] = Field(None, description="light 또는 dark")
    colors: Optional[Dict[str, Any]] = None
    variables: Optional[Any] = None
    is_default: Optional[bool] = None


class ThemeUpdateRequest(ThemeCreateRequest):
    pass


class MyThemesResponse(BaseModel):
    success: bool = True
    availableThemes: List[ThemeResponse]
    activeTheme: Optional[ThemeResponse] = None


class ThemeSelectRequest(BaseModel):
    theme_id: Any = Field(None, description="선택할 테마 ID")


class UserConfigResponse(ORMModel):
    user_id: int
    active_theme: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ThemeSelectResponse(BaseModel):
    success: bool = True
    message: str
    userConfig: UserConfigResponse


class UserConfigRequest(BaseModel):
    active_theme: Optional[int] = Field(None, description="활성 테마 ID")


class UserConfigDetailResponse(BaseModel):
    success: bool = True
    config: UserConfigResponse
    theme: Optional[ThemeResponse] = None


class UserConfigMutationResponse(BaseModel):
    success: bool = True
    message: str
    config: UserConfigResponse
