"""Service status and information router."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..core.dependencies import get_report_service, get_runtime_info
from ..core.introspection import RuntimeInfo
from ..schemas.status import InfoReport, StatusReport
from ..services.report_service import ReportService

router = APIRouter(prefix="/api", tags=["status"])


@router.api_route("/status", methods=["GET", "HEAD"], response_model=StatusReport)
async def service_status(reports: ReportService = Depends(get_report_service)) -> JSONResponse:
    """
    Service identity endpoint.

    Name, endpoints and features are fixed; only the timestamp changes.
    """
    return JSONResponse(status_code=200, content=reports.status().model_dump(by_alias=True))


@router.api_route("/info", methods=["GET", "HEAD"], response_model=InfoReport)
async def service_info(
    runtime: RuntimeInfo = Depends(get_runtime_info),
    reports: ReportService = Depends(get_report_service),
) -> JSONResponse:
    """Static application metadata endpoint."""
    return JSONResponse(status_code=200, content=reports.info(runtime).model_dump(by_alias=True))
