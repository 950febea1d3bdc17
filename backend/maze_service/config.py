"""Application configuration using Pydantic settings."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory (backend/)
BASE_DIR = Path(__file__).resolve().parent.parent

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Maze Service"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "PROD"
    log_level: str = "INFO"

    # Database - DATABASE_URL wins, otherwise the URL is built from the DB_* parts
    database_url: str = ""
    db_protocol: str = "postgresql+asyncpg"
    db_user: str = "postgres"
    db_userpw: str = "postgres"
    db_host: str = "localhost:5432"
    db_name: str = "cc2018"
    create_tables: bool = True

    # HTTP server
    maze_svc_host: str = "0.0.0.0"
    maze_svc_port: int = 8080

    # Deletes are refused entirely while this is unset
    delete_password: Optional[str] = None

    # Maze generation
    maze_generator: str = "maze_service.core.maze_generator:BacktrackingGenerator"

    # Rate limiting
    rate_limit_generate: int = 30  # generations per minute

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level name."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(sorted(LOG_LEVELS))}")
        return level

    @property
    def sqlalchemy_url(self) -> str:
        """Get the database URL used by the engine."""
        if self.database_url:
            return self.database_url
        return (
            f"{self.db_protocol}://{self.db_user}:{self.db_userpw}"
            f"@{self.db_host}/{self.db_name}"
        )

    @property
    def masked_database_url(self) -> str:
        """Database URL with the password hidden, for logging."""
        url = self.sqlalchemy_url
        if "@" not in url or "://" not in url:
            return url
        scheme, rest = url.split("://", 1)
        credentials, host = rest.rsplit("@", 1)
        user = credentials.split(":", 1)[0]
        return f"{scheme}://{user}:***@{host}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
