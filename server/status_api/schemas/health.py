"""Health-related Pydantic schemas."""

from typing import Dict, Literal

from pydantic import Field

from .common import CamelModel


class HealthReport(CamelModel):
    """Point-in-time process vitals returned by ``GET /health``."""

    status: Literal["ok"] = Field("ok", description="Always 'ok' while the process is alive")
    timestamp: int = Field(..., description="Epoch milliseconds, non-decreasing per process")
    version: str = Field(..., description="Service version")
    environment: str = Field(..., description="Application environment")
    uptime: float = Field(..., ge=0, description="Process uptime in seconds")
    memory: Dict[str, int] = Field(..., description="Named memory counters in bytes")
    pid: int = Field(..., description="Operating system process ID")
