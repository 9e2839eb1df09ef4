"""Root welcome router."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..core.dependencies import get_report_service
from ..schemas.status import WelcomeReport
from ..services.report_service import ReportService

router = APIRouter(tags=["root"])


@router.api_route("/", methods=["GET", "HEAD"], response_model=WelcomeReport)
async def welcome(reports: ReportService = Depends(get_report_service)) -> JSONResponse:
    """Welcome payload with the endpoint map."""
    return JSONResponse(status_code=200, content=reports.welcome().model_dump(by_alias=True))
