"""Common Pydantic schemas."""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a moment (default: now) as UTC ISO 8601 with milliseconds and a Z suffix."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EndpointMap(CamelModel):
    """Logical endpoint names mapped to their paths."""

    health: str = Field("/health", description="Process health report")
    status: str = Field("/api/status", description="Service identity and capabilities")
    info: str = Field("/api/info", description="Static application metadata")


class ErrorResponse(CamelModel):
    """Uniform error payload for 4xx and 5xx responses."""

    error: str = Field(..., description="Short error category")
    message: str = Field(..., description="Human-readable explanation")
    timestamp: str = Field(..., description="Time of the error (ISO 8601)")
    stack: Optional[str] = Field(None, description="Traceback, development mode only")
    available_endpoints: Optional[List[str]] = Field(
        None, description="Valid routes, present on Not Found responses"
    )

    def to_content(self) -> dict:
        """Serialize for a JSONResponse, omitting absent optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
