"""Application configuration settings."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "shortlinks.db"

    # Application
    app_title: str = "Short Links Service"
    app_version: str = "0.2.0"
    app_description: str = (
        "URL shortening with ownership, expiry, password protection and analytics"
    )
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    # Short codes
    default_short_code_length: int = 6
    max_short_code_length: int = 20
    min_short_code_length: int = 3
    max_collision_retries: int = 5

    # Shortening policy
    dedup_urls: bool = True
    allow_anonymous: bool = True
    max_batch_size: int = 100

    # Analytics
    default_recent_limit: int = 10
    max_recent_limit: int = 100

    # Access control
    blacklist_path: Optional[str] = None
    admin_token: Optional[str] = None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
