"""Health check router."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..core.dependencies import get_process_snapshot, get_report_service
from ..core.introspection import ProcessSnapshot
from ..schemas.health import HealthReport
from ..services.report_service import ReportService

router = APIRouter(tags=["health"])


@router.api_route("/health", methods=["GET", "HEAD"], response_model=HealthReport)
async def health_check(
    snapshot: ProcessSnapshot = Depends(get_process_snapshot),
    reports: ReportService = Depends(get_report_service),
) -> JSONResponse:
    """
    Health check endpoint.

    Returns process vitals; always succeeds while the process is alive.
    """
    report = reports.health(snapshot)
    return JSONResponse(status_code=200, content=report.model_dump(by_alias=True))
