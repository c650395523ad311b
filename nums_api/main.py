"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nums_api.api.routes import router as api_router
from nums_api.core.config import get_settings, validate_settings
from nums_api.core.db import dispose_engine
from nums_api.core.db_status import DatabaseStatus
from nums_api.core.error_handlers import register_error_handlers
from nums_api.core.logging_config import configure_logging
from nums_api.core.scheduler import start_scheduler, stop_scheduler

tags_metadata = [
    {
        "name": "system",
        "description": "Infra endpoints for health checks and diagnostics.",
    },
    {
        "name": "games",
        "description": (
            "Lottery draw records: tab-delimited upload and round-based lookup."
        ),
    },
    {"name": "users", "description": "Registration, login and self-service."},
    {"name": "profiles", "description": "Per-account game profile."},
    {"name": "configs", "description": "Per-account UI configuration."},
    {"name": "themes", "description": "Colour theme catalogue."},
    {
        "name": "admin",
        "description": "Account moderation, theme management and data freshness.",
    },
]


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Create tables and start the reconnect poll before serving traffic."""

    settings = get_settings()
    configure_logging(settings.log_level)
    validate_settings(settings)
    DatabaseStatus.initialize()
    start_scheduler()
    try:
        yield
    finally:
        stop_scheduler()
        dispose_engine()


app = FastAPI(
    title="NUMS API",
    description=(
        "Backend API storing lottery draw results and serving user accounts, "
        "profiles, themes and administration endpoints."
    ),
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.include_router(api_router)
register_error_handlers(app)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
