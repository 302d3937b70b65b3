import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, List

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)

DEVELOPMENT_JWT_SECRET = "dev-secret-please-change"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_name: str = Field(default="Wishing You API", env="APP_NAME", description="Human readable service name")
    environment: str = Field(default="development", env="ENVIRONMENT", description="Deployment environment name")
    debug: bool = Field(default=False, env="DEBUG", description="Enable debug mode")

    cors_origins: Annotated[List[AnyHttpUrl], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost",
            "http://localhost:3000",
            "http://localhost:5000",
            "http://127.0.0.1",
            "http://127.0.0.1:5000",
        ],
        env="CORS_ORIGINS",
        description="List of allowed CORS origins",
    )

    database_url: str = Field(default="sqlite:///./wishing_you.db", env="DATABASE_URL")
    database_auto_create: bool = Field(
        default=True,
        env="DATABASE_AUTO_CREATE",
        description="Create missing tables on startup instead of relying on migrations.",
    )

    jwt_secret_key: str | None = Field(default=None, env="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", env="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=60 * 24 * 7, env="ACCESS_TOKEN_EXPIRE_MINUTES")

    message_max_length: int = Field(default=1000, env="MESSAGE_MAX_LENGTH")
    comment_max_length: int = Field(default=500, env="COMMENT_MAX_LENGTH")

    email_host: str = Field(default="smtp.gmail.com", env="EMAIL_HOST")
    email_port: int = Field(default=587, env="EMAIL_PORT")
    email_user: str | None = Field(
        default=None,
        env="EMAIL_USER",
        description="SMTP login, also used as the sender address.",
    )
    email_password: str | None = Field(default=None, env="EMAIL_PASSWORD")
    email_sender_name: str = Field(default="Wishing You", env="EMAIL_SENDER_NAME")
    email_use_ssl: bool = Field(
        default=False,
        env="EMAIL_USE_SSL",
        description="Use implicit TLS (port 465) instead of STARTTLS.",
    )
    email_timeout_seconds: int = Field(default=10, env="EMAIL_TIMEOUT_SECONDS")
    client_url: str = Field(
        default="http://localhost:5000",
        env="CLIENT_URL",
        description="Public URL of the frontend, linked from notification emails.",
    )

    birthday_sweep_enabled: bool = Field(
        default=True,
        env="BIRTHDAY_SWEEP_ENABLED",
        description="Start the daily birthday email job together with the API.",
    )
    birthday_sweep_hour: int = Field(default=8, ge=0, le=23, env="BIRTHDAY_SWEEP_HOUR")
    birthday_sweep_minute: int = Field(default=0, ge=0, le=59, env="BIRTHDAY_SWEEP_MINUTE")
    birthday_sweep_timezone: str | None = Field(
        default=None,
        env="BIRTHDAY_SWEEP_TIMEZONE",
        description="IANA timezone for the daily job. Defaults to the server local time.",
    )

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parents[2] / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def email_configured(self) -> bool:
        return bool(self.email_user and self.email_password)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):  # type: ignore[override]
        if v in (None, "", Ellipsis):
            return v
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        if isinstance(v, (list, tuple, set)):
            return list(v)
        return v

    @field_validator("jwt_secret_key", "email_user", "email_password", "birthday_sweep_timezone", mode="before")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def ensure_secrets(self) -> None:
        """Fail fast when a required secret is missing outside development."""

        if self.jwt_secret_key:
            return
        if self.environment != "development":
            raise RuntimeError("JWT_SECRET_KEY must be set outside the development environment")
        logger.warning(
            "JWT_SECRET_KEY is not set. Using a temporary development secret; "
            "set JWT_SECRET_KEY for production."
        )
        self.jwt_secret_key = DEVELOPMENT_JWT_SECRET


@lru_cache
def get_settings() -> Settings:
    return Settings()
