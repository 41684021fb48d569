from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Toggly"
    app_version: str = "development"  # build revision, reported in X-Service-Version
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8080

    # API
    api_base_path: str = "/api"

    # Auth
    auth_token: str

    # Storage
    storage_backend: Literal["sql", "memory"] = "sql"
    database_url: str = "postgresql+asyncpg://localhost:5432/toggly"
    database_pool_size: int = 5
    database_max_overflow: int = 10
    auto_migrate: bool = False

    # Redis cache (optional - app works without it)
    redis_url: str | None = None  # e.g., "redis://localhost:6379/0"
    redis_pool_size: int = 10
    cache_ttl_seconds: int = 60

    @field_validator("auth_token")
    @classmethod
    def validate_auth_token(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("AUTH_TOKEN must not be empty")
        return v

    @field_validator("api_base_path")
    @classmethod
    def validate_api_base_path(cls, v: str) -> str:
        """Normalize to a leading slash and no trailing slash ("" for root)."""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = f"/{v}"
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
