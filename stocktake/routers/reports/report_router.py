from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from stocktake.core.db import get_db
from stocktake.utils.get_user import get_current_user
from stocktake.utils.response import success_response, APIResponse
from stocktake.services.reports.report_service import build_report, render_report
from stocktake.schemas.reports.report_schemas import ReportData, ReportFormat, ReportRequest

router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
)

MEDIA_TYPES = {
    ReportFormat.PDF: "application/pdf",
    ReportFormat.XLS: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


@router.post("/", response_model=APIResponse[ReportData])
async def build_report_api(
    payload: ReportRequest,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    data = await build_report(db, payload)
    return success_response("Report generated", data)


@router.post("/download")
async def download_report_api(
    payload: ReportRequest,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    data = await build_report(db, payload)
    file_path = render_report(data)
    return FileResponse(
        file_path,
        media_type=MEDIA_TYPES[data.format],
        filename=data.filename,
    )
