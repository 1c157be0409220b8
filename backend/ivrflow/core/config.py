"""Application configuration using Pydantic Settings.

Environment variables are loaded from .env files and system environment.
All sensitive values should be provided via environment variables.
"""

from enum import Enum
from functools import lru_cache
from typing import Any

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "change-me-in-production"


class LogLevel(str, Enum):
    """Accepted values for LOG_LEVEL."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application settings.

    All settings can be overridden via environment variables.
    Environment variables take precedence over .env file values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "IVR Flow Studio API"
    VERSION: str = "0.1.0"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"

    # CORS
    ALLOWED_ORIGINS: list[str] = ["http://localhost:3000"]

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def parse_allowed_origins(cls, v: Any) -> list[str]:
        """Parse ALLOWED_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        if isinstance(v, list):
            return v
        return ["http://localhost:3000"]

    # Database (file-backed SQLite by default, PostgreSQL via asyncpg)
    DATABASE_URL: str = "sqlite+aiosqlite:///./ivrflow.db"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 30
    DATABASE_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = True

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def ensure_async_driver(cls, v: Any) -> Any:
        """Rewrite plain PostgreSQL URLs to use the asyncpg driver."""
        if isinstance(v, str):
            if v.startswith("postgresql://"):
                return v.replace("postgresql://", "postgresql+asyncpg://", 1)
            if v.startswith("postgres://"):
                return v.replace("postgres://", "postgresql+asyncpg://", 1)
        return v

    # Security
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    BCRYPT_ROUNDS: int = 12

    # Logging
    LOG_LEVEL: LogLevel = LogLevel.INFO
    LOG_FILE: str | None = None  # Defaults to logs/app.log
    LOG_JSON_FORMAT: bool = True
    LOG_SENSITIVE_FILTER: bool = True

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        """Accept level names in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured database is SQLite."""
        return self.DATABASE_URL.startswith("sqlite")

    @model_validator(mode="after")
    def validate_secrets_in_production(self) -> "Settings":
        """Warn when the placeholder secret is used outside of debug mode."""
        if not self.DEBUG and self.SECRET_KEY == DEFAULT_SECRET_KEY:
            import warnings

            warnings.warn(
                "SECRET_KEY is using the default value; set SECRET_KEY in production",
                stacklevel=2,
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are cached after first load for performance.
    """
    return Settings()


# Global settings instance
settings = get_settings()
