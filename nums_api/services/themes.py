"""Theme catalogue management."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select

from nums_api.core.db import session_scope
from nums_api.core.errors import ConflictError, NotFoundError, ValidationError
from nums_api.models.tables import THEME_MODES, ThemeORM, UserConfigORM

REQUIRED_COLORS = (
    "primary",
    "secondary",
    "accent",
    "error",
    "info",
    "success",
    "warning",
    "background",
    "surface",
    "on-primary",
    "on-secondary",
    "on-background",
    "on-surface",
)
HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")
MAX_THEME_NAME_LENGTH = 50


def validate_theme_colors(colors: Any) -> Dict[str, Any]:
    """Every required color must be present as a ``#RRGGBB`` string."""

    if not isinstance(colors, dict):
        raise ValidationError("Colors must be an object", "INVALID_THEME_COLORS")
    for name in REQUIRED_COLORS:
        value = colors.get(name)
        if not isinstance(value, str) or not value:
            raise ValidationError(
                f"Missing or invalid color: {name}", "INVALID_THEME_COLORS"
            )
        if not HEX_COLOR.match(value):
            raise ValidationError(
                f"Invalid HEX color format: {name}", "INVALID_THEME_COLORS"
            )
    return colors


def _validate_mode(mode: Any) -> str:
    if mode not in THEME_MODES:
        raise ValidationError(
            "테마 모드는 'light' 또는 'dark'여야 합니다.", "INVALID_THEME_MODE"
        )
    return mode


def _check_name_length(*names: Optional[str]) -> None:
    for value in names:
        if value is not None and len(value) > MAX_THEME_NAME_LENGTH:
            raise ValidationError(
                f"테마명은 {MAX_THEME_NAME_LENGTH}자 이하여야 합니다.",
                "INVALID_THEME_NAME",
            )


def _ensure_unique_name(session, name: str) -> None:
    duplicate = session.scalars(select(ThemeORM).where(ThemeORM.name == name)).first()
    if duplicate is not None:
        raise ConflictError("이미 존재하는 테마명입니다.", "THEME_NAME_ALREADY_EXISTS")


def _load_theme(session, theme_id: int) -> ThemeORM:
    theme = session.get(ThemeORM, theme_id)
    if theme is None:
        raise NotFoundError("테마를 찾을 수 없습니다.", "THEME_NOT_FOUND")
    return theme


def list_themes(default_only: bool = False) -> List[ThemeORM]:
    query = select(ThemeORM).order_by(ThemeORM.theme_id.asc())
    if default_only:
        query = query.where(ThemeORM.is_default.is_(True))
    with session_scope() as session:
        return list(session.scalars(query).all())


def get_theme(theme_id: int) -> ThemeORM:
    with session_scope() as session:
        return _load_theme(session, theme_id)


def create_theme(
    name: Optional[str],
    mode: Optional[str],
    colors: Any,
    variables: Any = None,
    is_default: Optional[bool] = None,
    name_kr: Optional[str] = None,
) -> ThemeORM:
    if not name or not mode or not colors:
        raise ValidationError(
            "테마명, 모드, 컬러셋은 필수입니다.", "MISSING_REQUIRED_FIELDS"
        )
    _check_name_length(name, name_kr)
    _validate_mode(mode)
    validate_theme_colors(colors)

    with session_scope() as session:
        _ensure_unique_name(session, name)
        theme = ThemeORM(
            name=name,
            name_kr=name_kr,
            mode=mode,
            colors=colors,
            variables=variables,
            is_default=bool(is_default),
        )
        session.add(theme)
        session.flush()
        return theme


def update_theme(theme_id: int, changes: Dict[str, Any]) -> ThemeORM:
    """Apply the provided (non-``None``) fields to an existing theme."""

    _check_name_length(changes.get("name"), changes.get("name_kr"))

    with session_scope() as session:
        theme = _load_theme(session, theme_id)

        mode = changes.get("mode")
        if mode is not None:
            theme.mode = _validate_mode(mode)

        name = changes.get("name")
        if name and name != theme.name:
            _ensure_unique_name(session, name)
            theme.name = name

        if changes.get("colors") is not None:
            theme.colors = validate_theme_colors(changes["colors"])
        if "variables" in changes:
            theme.variables = changes["variables"]
        if changes.get("name_kr") is not None:
            theme.name_kr = changes["name_kr"]
        if changes.get("is_default") is not None:
            theme.is_default = bool(changes["is_default"])

        session.flush()
        return theme


def delete_theme(theme_id: int) -> None:
    """Default themes and themes still selected by a user are kept."""

    with session_scope() as session:
        theme = _load_theme(session, theme_id)
        if theme.is_default:
            raise ValidationError(
                "기본 테마는 삭제할 수 없습니다.", "CANNOT_DELETE_DEFAULT_THEME"
            )

        references = session.scalar(
            select(func.count())
            .select_from(UserConfigORM)
            .where(UserConfigORM.active_theme == theme_id)
        )
        if references:
            raise ConflictError(
                "사용 중인 테마는 삭제할 수 없습니다.",
                "THEME_IN_USE",
                {"references": int(references)},
            )
        session.delete(theme)


__all__ = [
    "REQUIRED_COLORS",
    "validate_theme_colors",
    "list_themes",
    "get_theme",
    "create_theme",
    "update_theme",
    "delete_theme",
]
