"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Bucket/folder names are the same values the legacy image references were written with

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://matsuri:matsuri@db:5432/matsuri"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres provides postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Object storage (Supabase-compatible storage REST API)
    storage_url: str = "http://storage:5000/storage/v1"
    storage_service_key: str = "storage-service-key-placeholder"
    storage_timeout_seconds: float = 30.0

    festival_image_bucket: str = "festival-images"
    festival_image_folder: str = "festival-images"
    sponsor_logo_bucket: str = "festival-logos"
    sponsor_logo_folder: str = "logos"
    signed_url_ttl_seconds: int = 3600

    # Pledge flow
    pledge_completion_delay_seconds: float = 5.0

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
