"""Application configuration helpers."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import quote_plus

from nums_api.core.env_loader import load_env_file

load_env_file()

logger = logging.getLogger(__name__)

FALLBACK_JWT_SECRET = "fallback_secret_key"


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Runtime configuration resolved from environment variables."""

    app_env: str = os.getenv("NUMS_ENV", "development")
    database_url: str = os.getenv("DATABASE_URL", "")
    mariadb_host: str = os.getenv("MARIADB_HOST", "127.0.0.1")
    mariadb_port: int = int(os.getenv("MARIADB_PORT", "3306"))
    mariadb_user: str = os.getenv("MARIADB_USER", "nums")
    mariadb_password: str = os.getenv("MARIADB_PASSWORD", "")
    mariadb_db_name: str = os.getenv("MARIADB_DB_NAME", "nums_db")
    db_connect_timeout: int = int(os.getenv("DB_CONNECT_TIMEOUT", "5"))
    db_reconnect_enabled: bool = _env_bool("DB_RECONNECT_ENABLED")
    db_reconnect_interval_seconds: int = int(os.getenv("DB_RECONNECT_INTERVAL", "30"))
    cors_allowed_origins: str = os.getenv("CORS_ORIGIN", "http://localhost:3000")
    jwt_secret_key: str = os.getenv("JWT_SECRET", FALLBACK_JWT_SECRET)
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    jwt_expires_minutes: int = int(os.getenv("JWT_EXPIRES_MINUTES", "1440"))
    password_hash_rounds: int = int(os.getenv("PASSWORD_HASH_ROUNDS", "10"))
    game_recent_threshold_days: int = int(
        os.getenv("GAME_RECENT_THRESHOLD_DAYS", "7")
    )
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def allowed_origins(self) -> list[str]:
        return [
            origin.strip()
            for origin in self.cors_allowed_origins.split(",")
            if origin.strip()
        ]

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def uses_fallback_secret(self) -> bool:
        return self.jwt_secret_key == FALLBACK_JWT_SECRET

    @property
    def database_dsn(self) -> str:
        """SQLAlchemy URL; DATABASE_URL wins over the MariaDB settings."""

        if self.database_url:
            return self.database_url
        password = quote_plus(self.mariadb_password)
        user = quote_plus(self.mariadb_user)
        return (
            f"mysql+pymysql://{user}:{password}"
            f"@{self.mariadb_host}:{self.mariadb_port}/{self.mariadb_db_name}"
        )


def validate_settings(settings: Settings) -> None:
    """Refuse to run production with the built-in JWT secret."""

    if not settings.uses_fallback_secret:
        return
    if settings.is_production:
        raise RuntimeError(
            "JWT_SECRET must be set explicitly when NUMS_ENV=production.",
        )
    logger.warning(
        "JWT_SECRET is not set; using the development fallback secret.",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings", "validate_settings", "FALLBACK_JWT_SECRET"]
