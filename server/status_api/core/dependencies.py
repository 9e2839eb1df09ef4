"""FastAPI dependencies for settings, process introspection and report building."""

from fastapi import Depends, Request

from .config import Settings
from .introspection import ProcessSnapshot, RuntimeInfo, process_introspector, read_runtime_info
from ..services.report_service import ReportService


def get_settings(request: Request) -> Settings:
    """
    Settings dependency.

    Returns the settings the application was created with.
    """
    return request.app.state.settings


def get_process_snapshot() -> ProcessSnapshot:
    """
    Process vitals dependency.

    Tests override this to report fixed uptime, memory and PID values.
    """
    return process_introspector.snapshot()


def get_runtime_info() -> RuntimeInfo:
    """Interpreter and host description dependency."""
    return read_runtime_info()


def get_report_service(settings: Settings = Depends(get_settings)) -> ReportService:
    """Report builder bound to the application settings."""
    return ReportService(settings)
