"""
Storefront API - Configuration Module
=====================================
All configuration is loaded from environment variables.
Secrets are never hardcoded; the signing key has no default.
"""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env."""

    # App
    app_name: str = "Storefront API"
    app_env: str = "development"
    app_debug: bool = True
    app_secret_key: str = Field(..., min_length=32)
    app_port: int = 3000

    @property
    def secret_key(self) -> str:
        return self.app_secret_key

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def expose_error_details(self) -> bool:
        # Production never echoes exception text, whatever app_debug says.
        return self.app_debug and not self.is_production

    # Database
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "storefront"
    postgres_user: str = "storefront"
    postgres_password: str = ""
    database_url_override: str = ""
    database_pool_size: int = 10
    database_max_overflow: int = 10

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # Auth
    jwt_algorithm: str = "HS256"
    access_token_expire_hours: int = 24
    auth_cookie_name: str = "token"

    @property
    def access_token_lifetime_seconds(self) -> int:
        return self.access_token_expire_hours * 3600

    # Activity log housekeeping
    activity_retention_days: int = 90
    activity_purge_on_startup: bool = True

    # CORS
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        env_prefix = "STOREFRONT_"


# Unprefixed keys accepted from older deployments.
_LEGACY_ALIASES = {
    "JWT_SECRET": "APP_SECRET_KEY",
    "PORT": "APP_PORT",
    "DATABASE_URL": "DATABASE_URL_OVERRIDE",
    "NODE_ENV": "APP_ENV",
}


def _load_dotenv_pairs(dotenv_path: str = ".env") -> dict[str, str]:
    path = Path(dotenv_path)
    if not path.exists():
        return {}

    values: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            values[key] = value
    return values


def _bootstrap_prefixed_env() -> None:
    """Populate STOREFRONT_ vars from unprefixed keys for backward compatibility."""
    legacy_pairs = _load_dotenv_pairs(".env")
    prefix = "STOREFRONT_"

    candidates: dict[str, list[str]] = {}
    for field_name in Settings.model_fields.keys():
        candidates[field_name.upper()] = [field_name.upper()]
    for legacy_key, field_key in _LEGACY_ALIASES.items():
        candidates.setdefault(field_key, []).append(legacy_key)

    for field_key, legacy_keys in candidates.items():
        prefixed_key = f"{prefix}{field_key}"
        if os.getenv(prefixed_key):
            continue

        for legacy_key in legacy_keys:
            legacy_value = os.getenv(legacy_key)
            if legacy_value is None:
                legacy_value = legacy_pairs.get(legacy_key)
            if legacy_value is not None:
                os.environ[prefixed_key] = legacy_value
                break


@lru_cache()
def get_settings() -> Settings:
    """Cached settings singleton."""
    _bootstrap_prefixed_env()
    return Settings()
