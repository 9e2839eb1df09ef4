"""Builds the status payloads from configuration and injected process data."""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..core.config import Settings
from ..core.introspection import ProcessSnapshot, RuntimeInfo
from ..schemas.common import EndpointMap, iso_timestamp
from ..schemas.health import HealthReport
from ..schemas.status import InfoReport, StatusReport, WelcomeReport

logger = logging.getLogger(__name__)

FEATURES: List[str] = [
    "GitHub Safe Merge & Deploy Workflow",
    "Merge state validation",
    "Automated releases",
    "Health monitoring",
]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReportService:
    """
    Stateless builder for every report the API serves.

    Nothing here touches global process state; callers pass in the snapshot
    or runtime description they want reported.
    """

    def __init__(self, settings: Settings, clock: Optional[Callable[[], datetime]] = None):
        self.settings = settings
        self._clock = clock or _utc_now

    def health(self, snapshot: ProcessSnapshot) -> HealthReport:
        """Build the health report for one request."""
        report = HealthReport(
            timestamp=snapshot.timestamp_ms,
            version=self.settings.app_version,
            environment=self.settings.environment,
            uptime=snapshot.uptime_seconds,
            memory=dict(snapshot.memory),
            pid=snapshot.pid,
        )
        logger.debug(
            "Health report built",
            extra={"uptime_seconds": round(snapshot.uptime_seconds, 3), "pid": snapshot.pid},
        )
        return report

    def status(self) -> StatusReport:
        """Build the service identity report."""
        return StatusReport(
            name=self.settings.service_name,
            version=self.settings.app_version,
            environment=self.settings.environment,
            timestamp=iso_timestamp(self._clock()),
            endpoints=EndpointMap(),
            features=list(FEATURES),
        )

    def info(self, runtime: RuntimeInfo) -> InfoReport:
        """Build the static application metadata report."""
        return InfoReport(
            application=self.settings.application_title,
            description=self.settings.application_description,
            repository=self.settings.repository_url,
            documentation=self.settings.docs_path,
            version=self.settings.app_version,
            runtime_version=runtime.runtime_version,
            platform=runtime.platform,
            architecture=runtime.architecture,
        )

    def welcome(self) -> WelcomeReport:
        """Build the root endpoint payload."""
        return WelcomeReport(
            message="GitHub Safe Merge & Deploy Workflow - Backend API",
            version=self.settings.app_version,
            endpoints=EndpointMap(),
        )
