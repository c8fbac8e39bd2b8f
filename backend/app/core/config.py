# backend/app/core/config.py
import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def is_running_tests() -> bool:
    """
    Detect if code is running under pytest.

    PYTEST_CURRENT_TEST is set automatically by pytest during test runs, and is
    not expected to be present in production environments.
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None


logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"  # Goes up to backend/.env
    logger.debug(f"[CONFIG] Looking for .env at: {env_path}")
    load_dotenv(env_path)


DEV_SECRET_KEY = "dev-secret-key-change-me-before-deploying"


class Settings(BaseSettings):
    """Runtime configuration for the booking API."""

    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENVIRONMENT", "environment"),
    )
    database_url: str = Field(
        default="sqlite:///./eventhub.db",
        validation_alias=AliasChoices("DATABASE_URL", "database_url"),
    )
    test_database_url: str = Field(
        default="sqlite+pysqlite:///:memory:",
        validation_alias=AliasChoices("TEST_DATABASE_URL", "test_database_url"),
    )
    is_testing: bool = Field(
        default=False,
        validation_alias=AliasChoices("IS_TESTING", "is_testing"),
    )

    # Auth
    secret_key: SecretStr = Field(
        default=SecretStr(DEV_SECRET_KEY),
        validation_alias=AliasChoices("SECRET_KEY", "JWT_SECRET", "secret_key"),
    )
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Observability
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
    )
    slow_operation_threshold_s: float = 1.0

    # Use ConfigDict instead of Config class (Pydantic V2 style)
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        normalized = str(value or "INFO").strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            logger.warning("Unknown LOG_LEVEL=%s; falling back to INFO", value)
            return "INFO"
        return normalized

    @field_validator("access_token_expire_minutes")
    @classmethod
    def _positive_expiry(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("access_token_expire_minutes must be positive")
        return value

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() in {"prod", "production"}

    def get_database_url(self) -> str:
        """Return the database URL for the current mode (tests use their own database)."""
        if self.is_testing or is_running_tests():
            return self.test_database_url
        return self.database_url


settings = Settings()

if settings.is_production and settings.secret_key.get_secret_value() == DEV_SECRET_KEY:
    logger.warning("[CONFIG] SECRET_KEY is the development placeholder in production")
