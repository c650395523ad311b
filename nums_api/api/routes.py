"""FastAPI router collecting every NUMS endpoint under ``/api``."""

from __future__ import annotations

from fastapi import APIRouter

from nums_api.api.routes_admin import router as admin_router
from nums_api.api.routes_configs import router as configs_router
from nums_api.api.routes_games import router as games_router
from nums_api.api.routes_profiles import router as profiles_router
from nums_api.api.routes_system import router as system_router
from nums_api.api.routes_themes import router as themes_router
from nums_api.api.routes_users import router as users_router

router = APIRouter(prefix="/api")
router.include_router(system_router)
router.include_router(games_router)
router.include_router(users_router)
router.include_router(profiles_router)
router.include_router(configs_router)
router.include_router(themes_router)
router.include_router(admin_router)

__all__ = ["router"]
