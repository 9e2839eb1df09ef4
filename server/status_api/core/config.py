"""Configuration settings for the status API."""

from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with Pydantic validation."""

    # Environment settings
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("environment", "node_env"),
        description="Application environment (ENVIRONMENT or NODE_ENV)"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Application log level"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Server host"
    )

    port: int = Field(
        default=3001,
        description="Server port"
    )

    shutdown_timeout_seconds: int = Field(
        default=10,
        gt=0,
        description="Grace period for in-flight requests after a termination signal"
    )

    # CORS settings
    frontend_url: str = Field(
        default="http://localhost:5173",
        description="The single origin allowed to call the API from a browser"
    )

    # Service identity
    app_version: str = Field(
        default="0.1.0",
        description="Version reported by every endpoint"
    )

    service_name: str = Field(
        default="merge-guard-demo-backend",
        description="Machine-friendly service name"
    )

    application_title: str = Field(
        default="GitHub Safe Merge & Deploy Workflow Demo",
        description="Human-friendly application name"
    )

    application_description: str = Field(
        default="A production-ready GitHub project demonstrating secure PR merge and deployment workflows",
        description="Short description of the application"
    )

    repository_url: str = Field(
        default="https://github.com/your-org/dev-workflow-poc",
        description="Source repository URL"
    )

    docs_path: str = Field(
        default="/docs",
        description="Path of the project documentation"
    )

    # Tracing settings
    otlp_endpoint: Optional[str] = Field(
        default=None,
        description="OTLP gRPC endpoint for span export; tracing stays local when unset"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_environments = ["development", "staging", "production"]
        if v.lower() not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v.lower()

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
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Return True if in production mode."""
        return self.environment == "production"

    @property
    def cors_origins(self) -> list[str]:
        """Origins passed to the CORS middleware."""
        return [self.frontend_url]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "populate_by_name": True,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()
