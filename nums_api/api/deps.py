"""Request-level authorization gates.

``require_session`` / ``optional_session`` only verify the bearer token;
``require_admin`` additionally needs one store lookup for the admin grant.
Routes stack them, e.g. ``Depends(require_admin)`` implies a session.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select

from nums_api.core.db import session_scope
from nums_api.core.errors import AuthenticationError, AuthorizationError
from nums_api.models.tables import AdminGrantORM
from nums_api.services.auth import SessionIdentity, decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _extract_token(credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    token = credentials.credentials.strip()
    return token or None


def require_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> SessionIdentity:
    """Reject requests without a valid bearer token."""

    token = _extract_token(credentials)
    if token is None:
        raise AuthenticationError("Access token is required", "MISSING_AUTH_TOKEN")

    identity = decode_access_token(token)
    request.state.identity = identity
    return identity


def optional_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[SessionIdentity]:
    """Resolve the identity when a valid token is present, else ``None``."""

    token = _extract_token(credentials)
    identity: Optional[SessionIdentity] = None
    if token is not None:
        try:
            identity = decode_access_token(token)
        except AuthenticationError:
            logger.debug("Ignoring invalid optional token")
    request.state.identity = identity
    return identity


def find_active_admin_role(user_id: int) -> Optional[str]:
    with session_scope() as session:
        grant = session.scalars(
            select(AdminGrantORM).where(
                AdminGrantORM.user_id == user_id,
                AdminGrantORM.is_active.is_(True),
            )
        ).first()
        return grant.role if grant is not None else None


def ensure_admin(identity: Optional[SessionIdentity]) -> SessionIdentity:
    """Second gate stage: an attached identity with an active admin grant."""

    if identity is None:
        raise AuthenticationError("인증이 필요합니다.", "AUTHENTICATION_REQUIRED")

    role = find_active_admin_role(identity.user_id)
    if role is None:
        raise AuthorizationError("관리자 권한이 필요합니다.", "ADMIN_ACCESS_REQUIRED")
    return identity.with_role(role)


def require_admin(
    request: Request,
    identity: SessionIdentity = Depends(require_session),
) -> SessionIdentity:
    """Any active grant (admin or super_admin) passes every admin route."""

    admin = ensure_admin(identity)
    request.state.identity = admin
    return admin


def require_owner(user_id: int, identity: SessionIdentity) -> None:
    """Per-account resources may only be touched by their owner."""

    if identity.user_id != user_id:
        raise AuthorizationError(
            "본인의 리소스에만 접근할 수 있습니다.", "OWNERSHIP_REQUIRED"
        )


__all__ = [
    "bearer_scheme",
    "require_session",
    "optional_session",
    "require_admin",
    "ensure_admin",
    "require_owner",
]
