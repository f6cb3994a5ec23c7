from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stocktake.core.db import get_db
from stocktake.utils.get_user import get_current_user
from stocktake.utils.response import success_response, APIResponse
from stocktake.services.stocktaking.count_service import record_count
from stocktake.schemas.stocktaking.record_schemas import RecordCreate, RecordOut

router = APIRouter(
    prefix="/records",
    tags=["Stock Taking Records"],
)


@router.post("/", response_model=APIResponse[RecordOut])
async def record_count_api(
    payload: RecordCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    record = await record_count(db, payload)
    return success_response("Count recorded", record)
