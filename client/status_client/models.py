"""Data held by the client: the fetched report and the view state around it."""

from dataclasses import dataclass
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_VERSION = "0.1.0"
DEFAULT_ENVIRONMENT = "development"


class HealthSnapshot(BaseModel):
    """
    Health report as received from ``GET /health``.

    Fields are lenient: a payload missing version or environment still
    renders with the defaults the UI has always shown.
    """

    model_config = ConfigDict(extra="allow")

    status: str = Field("unknown", description="Reported status, 'ok' when healthy")
    timestamp: Optional[int] = Field(None, description="Epoch milliseconds")
    version: Optional[str] = DEFAULT_VERSION
    environment: Optional[str] = DEFAULT_ENVIRONMENT
    uptime: Optional[float] = Field(None, description="Server uptime in seconds")
    memory: Dict[str, int] = Field(default_factory=dict)
    pid: Optional[int] = None

    @field_validator("version", mode="after")
    @classmethod
    def default_version(cls, v: Optional[str]) -> str:
        """Null or empty versions display as the default."""
        return v or DEFAULT_VERSION

    @field_validator("environment", mode="after")
    @classmethod
    def default_environment(cls, v: Optional[str]) -> str:
        return v or DEFAULT_ENVIRONMENT


@dataclass(frozen=True)
class ViewState:
    """
    What the rendering layer sees.

    ``report`` survives failed fetches; ``error`` is cleared at the start of
    every fetch cycle. A new view starts in the loading state.
    """

    loading: bool = True
    error: Optional[str] = None
    report: Optional[HealthSnapshot] = None
