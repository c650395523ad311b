"""Per-account settings (active theme selection)."""

from __future__ import annotations

from typing import Optional, Tuple

from nums_api.core.db import session_scope
from nums_api.core.errors import ConflictError, NotFoundError, ValidationError
from nums_api.models.tables import ThemeORM, UserConfigORM
from nums_api.services.themes import list_themes
from nums_api.services.users import load_account


def _require_theme(session, theme_id: int) -> ThemeORM:
    theme = session.get(ThemeORM, theme_id)
    if theme is None:
        raise NotFoundError("해당 테마를 찾을 수 없습니다.", "THEME_NOT_FOUND")
    return theme


def _load_config(session, user_id: int) -> UserConfigORM:
    config = session.get(UserConfigORM, user_id)
    if config is None:
        raise NotFoundError("사용자 설정을 찾을 수 없습니다.", "USER_CONFIG_NOT_FOUND")
    return config


def get_user_config(user_id: int) -> Tuple[UserConfigORM, ThemeORM]:
    with session_scope() as session:
        config = _load_config(session, user_id)
        return config, session.get(ThemeORM, config.active_theme)


def create_user_config(user_id: int, active_theme: Optional[int]) -> UserConfigORM:
    if not active_theme:
        raise ValidationError("테마 ID를 입력해주세요.", "MISSING_REQUIRED_FIELDS")

    with session_scope() as session:
        load_account(session, user_id)
        _require_theme(session, active_theme)
        if session.get(UserConfigORM, user_id) is not None:
            raise ConflictError(
                "해당 사용자의 설정이 이미 존재합니다.", "USER_CONFIG_ALREADY_EXISTS"
            )
        config = UserConfigORM(user_id=user_id, active_theme=active_theme)
        session.add(config)
        session.flush()
        return config


def update_user_config(user_id: int, active_theme: Optional[int]) -> UserConfigORM:
    with session_scope() as session:
        config = _load_config(session, user_id)
        if active_theme is not None:
            _require_theme(session, active_theme)
            config.active_theme = active_theme
        session.flush()
        return config


def delete_user_config(user_id: int) -> None:
    with session_scope() as session:
        session.delete(_load_config(session, user_id))


def select_theme(user_id: int, theme_id: int) -> UserConfigORM:
    """Create the config on first use, otherwise switch its active theme."""

    with session_scope() as session:
        _require_theme(session, theme_id)
        config = session.get(UserConfigORM, user_id)
        if config is None:
            load_account(session, user_id)
            config = UserConfigORM(user_id=user_id, active_theme=theme_id)
            session.add(config)
        else:
            config.active_theme = theme_id
        session.flush()
        return config


def find_active_theme_id(user_id: int) -> Optional[int]:
    with session_scope() as session:
        config = session.get(UserConfigORM, user_id)
        return config.active_theme if config is not None else None


def get_theme_selection(user_id: int) -> Tuple[list, Optional[ThemeORM]]:
    """Default themes offered to users, and the caller's active theme."""

    available = list_themes(default_only=True)
    with session_scope() as session:
        config = session.get(UserConfigORM, user_id)
        active = session.get(ThemeORM, config.active_theme) if config else None
    return available, active


__all__ = [
    "get_user_config",
    "create_user_config",
    "update_user_config",
    "delete_user_config",
    "select_theme",
    "get_theme_selection",
    "find_active_theme_id",
]
