"""Application configuration loaded from environment variables."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Accepted names for LOG_LEVEL (module-level so validators can use it).
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Validated application settings from ROLLBOOK_* env vars and optional .env file."""

    model_config = SettingsConfigDict(
        env_prefix="ROLLBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Flat files, relative to the working directory unless absolute
    STUDENT_FILE: str = "student.txt"
    CREDENTIALS_FILE: str = "credentials.txt"

    # Logs go to stderr; WARNING keeps the console quiet during normal use
    LOG_LEVEL: str = "WARNING"

    @field_validator("STUDENT_FILE", "CREDENTIALS_FILE")
    @classmethod
    def validate_file_path(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("file paths must be set and non-empty")
        return v.strip()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = (v or "").strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {list(VALID_LOG_LEVELS)}, got {v!r}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
