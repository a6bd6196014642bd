"""
Application configuration via environment variables.
"""
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App settings
    app_name: str = "Congregation Admin API"
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Storage backend: "memory" for in-memory, "sql" for database
    storage_type: Literal["memory", "sql"] = "sql"

    # Database (only used when storage_type="sql")
    database_url: str = "sqlite+aiosqlite:///./dev.db"  # Default for dev

    # Fill the in-memory tables with sample rows at startup
    seed_sample_data: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
