"""SQLAlchemy ORM tables."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    JSON,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from nums_api.core.db import Base

THEME_MODES = ("light", "dark")
ADMIN_ROLES = ("admin", "super_admin")
ADMIN_PERMISSIONS = (
    "user_manage",
    "theme_manage",
    "game_manage",
    "admin_manage",
    "system_manage",
)
PRIZE_TIERS = ("first", "second", "third", "fourth", "fifth")
MAX_BALL_NUMBER = 45
BALL_COLUMNS = tuple(f"number{index}" for index in range(1, 7)) + ("bonus_number",)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )


class AccountORM(TimestampMixin, Base):
    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    profile: Mapped[Optional["ProfileORM"]] = relationship(
        back_populates="account",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    config: Mapped[Optional["UserConfigORM"]] = relationship(
        back_populates="account",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    admin_grant: Mapped[Optional["AdminGrantORM"]] = relationship(
        back_populates="account",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class ProfileORM(TimestampMixin, Base):
    __tablename__ = "user_profiles"
    __table_args__ = (
        CheckConstraint("level >= 0 AND level <= 999", name="ck_profile_level"),
        CheckConstraint("experience >= 0", name="ck_profile_experience"),
    )

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.user_id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    )
    nickname: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    level: Mapped[int] = mapped_column(Integer, default=0, nullable=False, index=True)
    experience: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    account: Mapped[AccountORM] = relationship(back_populates="profile")


class ThemeORM(TimestampMixin, Base):
    __tablename__ = "themes"

    theme_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name_kr: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    mode: Mapped[str] = mapped_column(
        Enum(*THEME_MODES, name="theme_mode"), nullable=False, index=True
    )
    colors: Mapped[dict] = mapped_column(JSON, nullable=False)
    variables: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    is_default: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False, index=True
    )


class UserConfigORM(TimestampMixin, Base):
    __tablename__ = "user_configs"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.user_id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    )
    # Referenced themes cannot be dropped while a config points at them.
    active_theme: Mapped[int] = mapped_column(
        ForeignKey("themes.theme_id", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )

    account: Mapped[AccountORM] = relationship(back_populates="config")
    theme: Mapped[ThemeORM] = relationship()


class AdminGrantORM(TimestampMixin, Base):
    __tablename__ = "admins"

    admin_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.user_id", ondelete="CASCADE", onupdate="CASCADE"),
        unique=True,
        nullable=False,
    )
    role: Mapped[str] = mapped_column(
        Enum(*ADMIN_ROLES, name="admin_role"), default="admin", nullable=False
    )
    permissions: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False, index=True
    )

    account: Mapped[AccountORM] = relationship(back_populates="admin_grant")

    @validates("permissions")
    def _validate_permissions(self, _: str, value: List[str]) -> List[str]:
        for permission in value or []:
            if permission not in ADMIN_PERMISSIONS:
                raise ValueError(f"Invalid permission: {permission}")
        return list(value or [])


class GameORM(TimestampMixin, Base):
    """One lottery drawing keyed by its round number."""

    __tablename__ = "games"
    __table_args__ = (
        CheckConstraint("round > 0", name="ck_game_round_positive"),
        *(
            CheckConstraint(
                f"{tier}_prize_winners >= 0 AND {tier}_prize_amount >= 0",
                name=f"ck_game_{tier}_prize",
            )
            for tier in PRIZE_TIERS
        ),
        *(
            CheckConstraint(
                f"{column} BETWEEN 1 AND {MAX_BALL_NUMBER}",
                name=f"ck_game_{column}_range",
            )
            for column in BALL_COLUMNS
        ),
    )

    game_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    round: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    draw_date: Mapped[date] = mapped_column(Date, nullable=False)
    first_prize_winners: Mapped[int] = mapped_column(Integer, nullable=False)
    first_prize_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    second_prize_winners: Mapped[int] = mapped_column(Integer, nullable=False)
    second_prize_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    third_prize_winners: Mapped[int] = mapped_column(Integer, nullable=False)
    third_prize_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    fourth_prize_winners: Mapped[int] = mapped_column(Integer, nullable=False)
    fourth_prize_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    fifth_prize_winners: Mapped[int] = mapped_column(Integer, nullable=False)
    fifth_prize_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    number1: Mapped[int] = mapped_column(Integer, nullable=False)
    number2: Mapped[int] = mapped_column(Integer, nullable=False)
    number3: Mapped[int] = mapped_column(Integer, nullable=False)
    number4: Mapped[int] = mapped_column(Integer, nullable=False)
    number5: Mapped[int] = mapped_column(Integer, nullable=False)
    number6: Mapped[int] = mapped_column(Integer, nullable=False)
    bonus_number: Mapped[int] = mapped_column(Integer, nullable=False)


__all__ = [
    "AccountORM",
    "ProfileORM",
    "ThemeORM",
    "UserConfigORM",
    "AdminGrantORM",
    "GameORM",
    "THEME_MODES",
    "ADMIN_ROLES",
    "ADMIN_PERMISSIONS",
]
