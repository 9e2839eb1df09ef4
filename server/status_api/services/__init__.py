"""Service layer package."""

from .report_service import FEATURES, ReportService

__all__ = [
    "FEATURES",
    "ReportService",
]
