from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_ALLOWED_HOSTS = ["localhost", "127.0.0.1", "testserver"]


def _normalize_allowed_hosts(value: Any) -> list[str]:
    """Accept comma-separated string or list-like and normalize hosts."""
    if value is None or value == "":
        return []

    if isinstance(value, str):
        parts = [part.strip() for part in value.split(",")]
    elif isinstance(value, (list, tuple, set)):
        parts = [str(part).strip() for part in value]
    else:
        return []

    return [part for part in parts if part]


class Settings(BaseSettings):
    """Application settings."""

    # Application
    APP_NAME: str = "AnonChat"
    ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    ALLOWED_HOSTS: Annotated[list[str], NoDecode] = Field(default_factory=lambda: DEFAULT_ALLOWED_HOSTS.copy())
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Moderation
    REQUEST_LIMIT: int = Field(default=5, gt=0)
    WINDOW_SECONDS: float = Field(default=60, gt=0)
    MAX_MESSAGE_LENGTH: int = Field(default=200, gt=0)
    RECENT_MESSAGE_LIMIT: int = Field(default=100, gt=0)
    PROCESSING_DELAY_SECONDS: float = Field(default=3, ge=0)

    # Board page
    PAGE_REFRESH_SECONDS: int = Field(default=10, ge=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("ALLOWED_HOSTS", mode="before")
    @classmethod
    def parse_allowed_hosts(cls, value: Any) -> list[str] | Any:
        """Support comma-separated ALLOWED_HOSTS from environment."""
        return _normalize_allowed_hosts(value)


def validate_settings(config: Settings) -> None:
    """Fail fast when running production with development defaults."""
    if config.ENV.lower() != "production":
        return

    if config.DEBUG:
        raise ValueError("DEBUG must be disabled in production.")

    if not config.ALLOWED_HOSTS or config.ALLOWED_HOSTS == DEFAULT_ALLOWED_HOSTS:
        raise ValueError("ALLOWED_HOSTS must be configured explicitly in production.")


settings = Settings()


validate_settings(settings)
