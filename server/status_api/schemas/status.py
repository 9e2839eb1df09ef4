"""Service identity and metadata schemas."""

from typing import List

from pydantic import Field

from .common import CamelModel, EndpointMap


class StatusReport(CamelModel):
    """Static service identity; only ``timestamp`` changes between calls."""

    name: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    environment: str = Field(..., description="Application environment")
    timestamp: str = Field(..., description="Current server time (ISO 8601)")
    endpoints: EndpointMap = Field(default_factory=EndpointMap)
    features: List[str] = Field(..., description="Advertised features, in display order")


class InfoReport(CamelModel):
    """Static application metadata."""

    application: str
    description: str
    repository: str
    documentation: str
    version: str
    runtime_version: str = Field(..., description="Interpreter version")
    platform: str = Field(..., description="Operating system platform identifier")
    architecture: str = Field(..., description="CPU architecture")


class WelcomeReport(CamelModel):
    """Payload of the root endpoint."""

    message: str
    version: str
    endpoints: EndpointMap = Field(default_factory=EndpointMap)
