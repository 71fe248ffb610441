"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bookshelf.constants import API_TIMEOUT_EXTERNAL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App
    app_env: Literal["development", "production", "test"] = "development"
    app_name: str = "Bookshelf"
    host: str = "127.0.0.1"
    port: int = 8765
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None

    # Database
    database_url: str = "sqlite+aiosqlite:///./bookshelf.sqlite"
    database_echo: bool = False

    # National Diet Library search API
    ndl_api_url: str = "https://ndlsearch.ndl.go.jp/api/sru"
    ndl_timeout: float = API_TIMEOUT_EXTERNAL

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Only async SQLite URLs are supported."""
        if v.startswith("sqlite:///"):
            return v.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        if not v.startswith("sqlite+aiosqlite://"):
            raise ValueError("DATABASE_URL must be a sqlite+aiosqlite:// URL")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
