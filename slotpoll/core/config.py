"""Runtime settings, read from the environment and ``.env``."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Optional, Union
import os

from slotpoll.core.constants import (
    ACCESS_TOKEN_EXPIRE_MINUTES as DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES,
    DEFAULT_DAY_END,
    DEFAULT_DAY_START,
    DEFAULT_SLOT_MINUTES,
)

DEFAULT_SECRET_KEY = "slotpoll-dev-secret"
DEV_DATABASE_URL = "sqlite:///slotpoll.db"


class Settings(BaseSettings):
    """SlotPoll settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # Poll store: a full URL, or the POSTGRES_* parts
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_HOST: Optional[str] = None
    POSTGRES_PORT: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    DB_POOL_SIZE: int = 15
    DB_MAX_OVERFLOW: int = 25

    # Voter sessions
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES

    # Browser origins allowed to call the API
    CORS_ORIGINS: Union[list, str] = ["*"]

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Accept ``"https://a.example,https://b.example"`` as well as a list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v

    APP_TITLE: str = "SlotPoll Scheduling Service"
    APP_DESCRIPTION: str = "Weekly and calendar availability polls with ranked tallies"
    APP_VERSION: str = "1.0.0"

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Weekly grid: first and last slot start (HH:MM), and slot length
    SCHEDULE_DAY_START: str = DEFAULT_DAY_START
    SCHEDULE_DAY_END: str = DEFAULT_DAY_END
    SCHEDULE_SLOT_MINUTES: int = DEFAULT_SLOT_MINUTES

    @field_validator('SCHEDULE_DAY_START', 'SCHEDULE_DAY_END')
    @classmethod
    def validate_clock_time(cls, v: str) -> str:
        """Require HH:MM clock times."""
        hours, _, minutes = v.partition(":")
        if not (hours.isdigit() and minutes.isdigit()) or int(hours) > 23 or int(minutes) > 59:
            raise ValueError(f"Invalid clock time: {v!r} (expected HH:MM)")
        return f"{int(hours):02d}:{int(minutes):02d}"

    def get_database_url(self) -> str:
        """
        Resolve the store URL.

        DATABASE_URL wins; otherwise a Postgres URL is assembled from the
        POSTGRES_* parts. Development falls back to a local SQLite file.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL

        if all([self.POSTGRES_USER, self.POSTGRES_PASSWORD,
                self.POSTGRES_HOST, self.POSTGRES_DB]):
            port = self.POSTGRES_PORT or "5432"
            return (
                f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
                f"@{self.POSTGRES_HOST}:{port}/{self.POSTGRES_DB}"
            )

        if self.ENVIRONMENT == "development":
            return DEV_DATABASE_URL

        raise ValueError(
            "No poll store configured. Set DATABASE_URL or "
            "POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_HOST and POSTGRES_DB"
        )

    def validate_production_config(self) -> None:
        """Refuse to run a production deployment on development defaults."""
        if self.ENVIRONMENT != "production":
            return

        problems = []
        if self.SECRET_KEY == DEFAULT_SECRET_KEY:
            problems.append("SECRET_KEY is still the development secret")
        if self.CORS_ORIGINS == ["*"]:
            problems.append("CORS_ORIGINS allows every origin")
        if self.get_database_url().startswith("sqlite"):
            problems.append("DATABASE_URL points at SQLite")

        if problems:
            raise ValueError(
                "Refusing to start in production:\n" +
                "\n".join(f"  - {problem}" for problem in problems)
            )


settings = Settings()

if os.getenv("ENVIRONMENT") == "production":
    settings.validate_production_config()
