"""Password hashing and signed session tokens."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from nums_api.core.config import get_settings
from nums_api.core.errors import AuthenticationError, ValidationError

MIN_PASSWORD_LENGTH = 6
TOKEN_TYPE = "access"


@dataclass(frozen=True)
class SessionIdentity:
    """Identity decoded from a verified bearer token."""

    user_id: int
    username: str
    role: Optional[str] = None

    def with_role(self, role: str) -> "SessionIdentity":
        return replace(self, role=role)


@lru_cache(maxsize=1)
def _pwd_context() -> CryptContext:
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=get_settings().password_hash_rounds,
    )


def check_password_policy(password: Optional[str]) -> str:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"비밀번호는 최소 {MIN_PASSWORD_LENGTH}자 이상이어야 합니다.",
            "PASSWORD_POLICY_VIOLATION",
        )
    return password


def hash_password(password: str) -> str:
    return _pwd_context().hash(check_password_policy(password))


def verify_password(plain: str, hashed: str) -> bool:
    if not plain or not hashed:
        return False
    try:
        return _pwd_context().verify(plain, hashed)
    except (ValueError, TypeError):
        # unknown or corrupt hash format
        return False


def create_access_token(
    user_id: int,
    username: str,
    ttl: Optional[timedelta] = None,
) -> str:
    """Sign a time-limited token binding the account id and username."""

    settings = get_settings()
    now = datetime.now(timezone.utc)
    lifetime = ttl if ttl is not None else timedelta(minutes=settings.jwt_expires_minutes)
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "username": username,
        "type": TOKEN_TYPE,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> SessionIdentity:
    """Verify signature and expiry; every failure looks the same to callers."""

    settings = get_settings()
    failure = AuthenticationError(
        "Invalid or expired token", "TOKEN_VERIFICATION_FAILED"
    )
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.PyJWTError as exc:
        raise failure from exc

    if payload.get("type") != TOKEN_TYPE or not payload.get("username"):
        raise failure
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError) as exc:
        raise failure from exc
    return SessionIdentity(user_id=user_id, username=str(payload["username"]))


__all__ = [
    "SessionIdentity",
    "MIN_PASSWORD_LENGTH",
    "check_password_policy",
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_access_token",
]
