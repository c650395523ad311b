"""User profile services."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select

from nums_api.core.db import session_scope
from nums_api.core.errors import ConflictError, NotFoundError, ValidationError
from nums_api.models.tables import ProfileORM
from nums_api.services.users import load_account

MAX_LEVEL = 999
MAX_NICKNAME_LENGTH = 50


def _check_values(
    nickname: Optional[str], level: Optional[int], experience: Optional[int]
) -> None:
    if nickname is not None and not 1 <= len(nickname.strip()) <= MAX_NICKNAME_LENGTH:
        raise ValidationError(
            f"닉네임은 1~{MAX_NICKNAME_LENGTH}자여야 합니다.", "INVALID_PROFILE_VALUE"
        )
    if level is not None and not 0 <= level <= MAX_LEVEL:
        raise ValidationError(
            f"레벨은 0~{MAX_LEVEL} 사이여야 합니다.", "INVALID_PROFILE_VALUE"
        )
    if experience is not None and experience < 0:
        raise ValidationError("경험치는 0 이상이어야 합니다.", "INVALID_PROFILE_VALUE")


def _ensure_nickname_free(session, nickname: str) -> None:
    existing = session.scalars(
        select(ProfileORM).where(ProfileORM.nickname == nickname)
    ).first()
    if existing is not None:
        raise ConflictError("이미 사용 중인 닉네임입니다.", "NICKNAME_ALREADY_EXISTS")


def create_profile(
    user_id: int,
    nickname: Optional[str],
    level: Optional[int] = None,
    experience: Optional[int] = None,
) -> ProfileORM:
    """Create the profile of an account that does not have one yet."""

    if not nickname:
        raise ValidationError("닉네임을 입력해주세요.", "MISSING_REQUIRED_FIELDS")
    _check_values(nickname, level, experience)

    with session_scope() as session:
        load_account(session, user_id)
        if session.get(ProfileORM, user_id) is not None:
            raise ConflictError(
                "User profile already exists", "USER_PROFILE_ALREADY_EXISTS"
            )
        _ensure_nickname_free(session, nickname)

        profile = ProfileORM(
            user_id=user_id,
            nickname=nickname,
            level=level if level is not None else 0,
            experience=experience if experience is not None else 0,
        )
        session.add(profile)
        session.flush()
        return profile


def update_profile(
    user_id: int,
    nickname: Optional[str] = None,
    level: Optional[int] = None,
    experience: Optional[int] = None,
) -> ProfileORM:
    _check_values(nickname, level, experience)

    with session_scope() as session:
        profile = session.get(ProfileORM, user_id)
        if profile is None:
            raise NotFoundError(
                "사용자 프로필을 찾을 수 없습니다.", "USER_PROFILE_NOT_FOUND"
            )
        if nickname and nickname != profile.nickname:
            _ensure_nickname_free(session, nickname)
            profile.nickname = nickname
        if level is not None:
            profile.level = level
        if experience is not None:
            profile.experience = experience
        session.flush()
        return profile


__all__ = ["create_profile", "update_profile"]
