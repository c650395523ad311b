"""Administrative operations on accounts and admin grants."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from sqlalchemy import select

from nums_api.core.db import session_scope
from nums_api.core.errors import NotFoundError, ValidationError
from nums_api.models.tables import (
    ADMIN_PERMISSIONS,
    ADMIN_ROLES,
    AccountORM,
    AdminGrantORM,
)
from nums_api.services.users import delete_account, get_user, list_users, update_account

logger = logging.getLogger(__name__)


def list_admin_users() -> list[AccountORM]:
    return list_users()


def get_admin_user(user_id: int) -> AccountORM:
    return get_user(user_id)


def update_admin_user(
    user_id: int,
    username: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> AccountORM:
    return update_account(user_id, username=username, is_active=is_active)


def delete_admin_user(user_id: int) -> None:
    delete_account(user_id)


def grant_admin(
    username: str,
    role: str = "admin",
    permissions: Iterable[str] = (),
) -> AdminGrantORM:
    """Create or re-activate the admin grant of ``username``."""

    if role not in ADMIN_ROLES:
        raise ValidationError(f"Invalid role: {role}", "INVALID_ADMIN_ROLE")
    granted = list(dict.fromkeys(permissions))
    unknown = [item for item in granted if item not in ADMIN_PERMISSIONS]
    if unknown:
        raise ValidationError(
            f"Invalid permission: {', '.join(unknown)}", "INVALID_ADMIN_PERMISSION"
        )

    with session_scope() as session:
        account = session.scalars(
            select(AccountORM).where(AccountORM.username == username)
        ).first()
        if account is None:
            raise NotFoundError("사용자를 찾을 수 없습니다.", "USER_NOT_FOUND")

        grant = session.scalars(
            select(AdminGrantORM).where(AdminGrantORM.user_id == account.user_id)
        ).first()
        if grant is None:
            grant = AdminGrantORM(user_id=account.user_id)
            session.add(grant)
        grant.role = role
        grant.permissions = granted
        grant.is_active = True
        session.flush()

    logger.info("Granted %s to %s (%s)", role, username, ", ".join(granted) or "-")
    return grant


def revoke_admin(username: str) -> bool:
    """Deactivate the grant; returns False when there was nothing to revoke."""

    with session_scope() as session:
        grant = session.scalars(
            select(AdminGrantORM)
            .join(AccountORM, AccountORM.user_id == AdminGrantORM.user_id)
            .where(AccountORM.username == username)
        ).first()
        if grant is None or not grant.is_active:
            return False
        grant.is_active = False
    logger.info("Revoked admin grant of %s", username)
    return True


__all__ = [
    "list_admin_users",
    "get_admin_user",
    "update_admin_user",
    "delete_admin_user",
    "grant_admin",
    "revoke_admin",
]
