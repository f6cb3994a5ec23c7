from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from stocktake.core.db import get_db
from stocktake.models.enums.user_role import UserRole
from stocktake.utils.check_roles import require_role
from stocktake.utils.logger import get_logger
from stocktake.schemas.master_data.import_schemas import (
    MasterDataUploadRequest,
    ImportSummary,
)
from stocktake.services.master_data.import_service import import_master_data
from stocktake.services.master_data.payload_decoder import encode_payload

logger = get_logger(__name__)

router = APIRouter(
    prefix="/master-data",
    tags=["Master Data"],
)


def _summary_response(summary: ImportSummary) -> dict:
    return {
        "success": summary.success,
        "message": (
            f"Imported {summary.imported_count} parts"
            if summary.success
            else "Master data import failed"
        ),
        "data": summary,
    }


@router.post("/import")
async def import_master_data_api(
    payload: MasterDataUploadRequest,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role([UserRole.ADMIN])),
):
    summary = await import_master_data(db, payload.project_id, payload.file_data, user)
    return _summary_response(summary)


@router.post("/upload")
async def upload_master_data_api(
    project_id: int = Form(...),
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role([UserRole.ADMIN])),
):
    content = await file.read()
    logger.info(
        "Master data file received",
        extra={"upload_name": file.filename, "size": len(content)},
    )
    summary = await import_master_data(db, project_id, encode_payload(content), user)
    return _summary_response(summary)
