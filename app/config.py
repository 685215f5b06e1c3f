"""Application configuration via pydantic-settings."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Literal

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Hostel Portal"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 4

    # Hostel backend (authoritative service)
    backend_api_url: str = "http://localhost:3010/"
    backend_timeout_seconds: float = 30.0

    @computed_field
    @property
    def backend_base_url(self) -> str:
        """Backend URL without the trailing slash."""
        return self.backend_api_url.rstrip("/")

    # Read cache
    booking_cache_ttl_seconds: int = 120  # 2 minutes
    booking_history_cache_ttl_seconds: int = 300  # 5 minutes
    query_cache_max_entries: int = 5000

    # Sessions
    # tokens without an exp claim are re-checked against the profile after this long
    session_opaque_ttl_seconds: int = 8 * 3600

    # Navigation
    navigation_hide_empty_parents: bool = True

    # CORS
    cors_origins: List[str] = ["http://localhost:3000"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
