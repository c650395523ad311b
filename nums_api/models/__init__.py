"""ORM models registered on the shared declarative base."""

from nums_api.models.tables import (  # noqa: F401
    AccountORM,
    AdminGrantORM,
    GameORM,
    ProfileORM,
    ThemeORM,
    UserConfigORM,
)
