"""Application configuration management."""
from pydantic import model_validator, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from functools import lru_cache
from sqlalchemy.engine.url import make_url, URL
from sqlalchemy.exc import ArgumentError
from typing import Annotated, Optional
import logging

SQLITE_LOCAL_URL = "sqlite+aiosqlite:///./surveydesk.db"
DEFAULT_SECRET_KEY = "dev-secret-key-change-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = SQLITE_LOCAL_URL
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # Application
    environment: str = "development"
    frontend_url: str = "http://localhost:3000"
    log_dir: str = "logs"
    create_tables_on_startup: bool = True

    # Session tokens
    secret_key: str = DEFAULT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    access_token_exp_minutes: int = 120
    access_token_cookie_name: str = "surveydesk_session"

    # Admin access
    admin_emails: Annotated[set[str], NoDecode] = set()

    # Responses
    allow_duplicate_responses: bool = True

    # Analytics
    leaderboard_size: int = 5
    time_series_window_days: int = 7

    @field_validator("admin_emails", mode="before")
    @classmethod
    def parse_admin_emails(cls, value):
        """Parse comma-separated admin emails from environment variables."""
        if value is None:
            return set()
        if isinstance(value, str):
            items = [item.strip().lower() for item in value.split(",") if item.strip()]
        elif isinstance(value, (list, tuple, set)):
            items = [str(item).strip().lower() for item in value if str(item).strip()]
        else:
            raise TypeError("admin_emails must be provided as a string or sequence")
        return set(items)

    def is_admin_email(self, email: str | None) -> bool:
        """Determine if the provided email belongs to a bootstrap administrator."""
        if not email:
            return False
        return email.strip().lower() in self.admin_emails

    @model_validator(mode="after")
    def validate_all_config(self):
        """Validate security configuration and normalize Postgres URLs."""
        logger = logging.getLogger(__name__)

        if self.environment == "production" and self.secret_key == DEFAULT_SECRET_KEY:
            raise ValueError("secret_key must be changed from default value in production")

        if self.jwt_algorithm not in ["HS256", "HS384", "HS512"]:
            raise ValueError(f"Unsupported JWT algorithm: {self.jwt_algorithm}. Use HS256, HS384, or HS512.")

        if self.access_token_exp_minutes < 1 or self.access_token_exp_minutes > 1440:
            raise ValueError("access_token_exp_minutes must be between 1 and 1440 (24 hours)")

        if self.leaderboard_size < 1:
            raise ValueError("leaderboard_size must be at least 1")

        if self.time_series_window_days < 1:
            raise ValueError("time_series_window_days must be at least 1")

        url = self.database_url
        if not url:
            logger.warning("Empty DATABASE_URL, using SQLite fallback")
            self.database_url = SQLITE_LOCAL_URL
            return self

        parsed: Optional[URL] = None
        try:
            parsed = make_url(url)
        except ArgumentError as e:
            logger.error(f"Failed to parse DATABASE_URL: {e}")
            logger.warning("Invalid DATABASE_URL; falling back to default sqlite database.")
            self.database_url = SQLITE_LOCAL_URL
            return self

        drivername = parsed.drivername
        if drivername.startswith("postgres") and "+asyncpg" not in drivername:
            parsed = parsed.set(drivername="postgresql+asyncpg")
            logger.info(f"Driver normalized: {drivername} -> {parsed.drivername}")

        # render_as_string re-encodes special characters in the password
        self.database_url = parsed.render_as_string(hide_password=False)
        return self

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
