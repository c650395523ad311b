"""Account registration, login and self-service account operations."""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from sqlalchemy import delete, select

from nums_api.core.db import session_scope
from nums_api.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from nums_api.models.tables import (
    AccountORM,
    AdminGrantORM,
    ProfileORM,
    UserConfigORM,
)
from nums_api.services.auth import (
    check_password_policy,
    create_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,50}$")


def validate_username(username: str) -> str:
    if not USERNAME_PATTERN.match(username):
        raise ValidationError(
            "사용자명은 3~50자의 영문, 숫자, 밑줄만 사용할 수 있습니다.",
            "INVALID_USERNAME",
        )
    return username


def _require_credentials(username: Optional[str], password: Optional[str]) -> None:
    if not username or not password:
        raise ValidationError(
            "사용자명과 비밀번호를 모두 입력해주세요.", "MISSING_REQUIRED_FIELDS"
        )


def _ensure_username_free(session, username: str) -> None:
    existing = session.scalars(
        select(AccountORM).where(AccountORM.username == username)
    ).first()
    if existing is not None:
        raise ConflictError("이미 존재하는 사용자명입니다.", "USERNAME_ALREADY_EXISTS")


def load_account(session, user_id: int) -> AccountORM:
    account = session.get(AccountORM, user_id)
    if account is None:
        raise NotFoundError("사용자를 찾을 수 없습니다.", "USER_NOT_FOUND")
    return account


def register_user(
    username: Optional[str], password: Optional[str]
) -> Tuple[AccountORM, ProfileORM]:
    """Create the account and its default profile in one transaction."""

    _require_credentials(username, password)
    validate_username(username)
    password_hash = hash_password(password)

    with session_scope() as session:
        _ensure_username_free(session, username)
        nickname_taken = session.scalars(
            select(ProfileORM).where(ProfileORM.nickname == username)
        ).first()
        if nickname_taken is not None:
            raise ConflictError("이미 사용 중인 닉네임입니다.", "NICKNAME_ALREADY_EXISTS")

        account = AccountORM(username=username, password_hash=password_hash)
        session.add(account)
        session.flush()

        profile = ProfileORM(
            user_id=account.user_id,
            nickname=username,
            level=0,
            experience=0,
        )
        session.add(profile)
        session.flush()

    logger.info("Registered user %s (id=%s)", account.username, account.user_id)
    return account, profile


def login_user(
    username: Optional[str], password: Optional[str]
) -> Tuple[str, AccountORM]:
    _require_credentials(username, password)
    with session_scope() as session:
        account = session.scalars(
            select(AccountORM).where(AccountORM.username == username)
        ).first()

    if account is None or not verify_password(password, account.password_hash):
        raise AuthenticationError(
            "사용자명 또는 비밀번호가 올바르지 않습니다.", "INVALID_CREDENTIALS"
        )
    if not account.is_active:
        raise AuthorizationError("비활성화된 계정입니다.", "ACCOUNT_INACTIVE")

    token = create_access_token(account.user_id, account.username)
    return token, account


def list_users() -> List[AccountORM]:
    with session_scope() as session:
        return list(
            session.scalars(
                select(AccountORM).order_by(
                    AccountORM.created_at.desc(), AccountORM.user_id.desc()
                )
            ).all()
        )


def get_user(user_id: int) -> AccountORM:
    with session_scope() as session:
        return load_account(session, user_id)


def get_me(user_id: int) -> Tuple[ProfileORM, Optional[int]]:
    """Profile of the caller plus the id of its active theme, if any."""

    with session_scope() as session:
        profile = session.get(ProfileORM, user_id)
        if profile is None:
            raise NotFoundError(
                "사용자 프로필을 찾을 수 없습니다.", "USER_PROFILE_NOT_FOUND"
            )
        config = session.get(UserConfigORM, user_id)
        return profile, config.active_theme if config is not None else None


def update_account(
    user_id: int,
    username: Optional[str] = None,
    password: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> AccountORM:
    """Change username / password / active flag of one account."""

    new_hash = hash_password(check_password_policy(password)) if password else None
    with session_scope() as session:
        account = load_account(session, user_id)
        if username and username != account.username:
            validate_username(username)
            _ensure_username_free(session, username)
            account.username = username
        if new_hash is not None:
            account.password_hash = new_hash
        if is_active is not None:
            account.is_active = is_active
        session.flush()
        return account


def delete_account(user_id: int) -> None:
    """Remove the account and every dependent row atomically."""

    with session_scope() as session:
        account = load_account(session, user_id)
        for model in (ProfileORM, UserConfigORM, AdminGrantORM):
            session.execute(delete(model).where(model.user_id == user_id))
        session.delete(account)
    logger.info("Deleted user id=%s with dependent data", user_id)


__all__ = [
    "validate_username",
    "register_user",
    "login_user",
    "list_users",
    "get_user",
    "get_me",
    "update_account",
    "delete_account",
]
