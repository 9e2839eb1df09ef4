"""Configuration settings for the status client."""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    """Client settings with Pydantic validation."""

    api_url: str = Field(
        default="http://localhost:3001",
        validation_alias=AliasChoices("status_api_url", "vite_api_url"),
        description="Base URL of the status API (STATUS_API_URL or VITE_API_URL)"
    )

    poll_interval_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Seconds between fetch cycles"
    )

    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout applied to each fetch"
    )

    environment: str = Field(
        default="development",
        description="Controls the log format"
    )

    log_level: str = Field(
        default="INFO",
        description="Client log level"
    )

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended."""
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @property
    def debug(self) -> bool:
        """Return True if in development mode."""
        return self.environment.lower() == "development"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "populate_by_name": True,
        "extra": "ignore",
    }
