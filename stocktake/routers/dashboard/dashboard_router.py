from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stocktake.core.db import get_db
from stocktake.utils.get_user import get_current_user
from stocktake.utils.response import success_response, APIResponse
from stocktake.services.dashboard_service import get_dashboard_counts
from stocktake.schemas.dashboard_schemas import DashboardCounts

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/", response_model=APIResponse[DashboardCounts])
async def dashboard_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    counts = await get_dashboard_counts(db, user.id)
    return success_response("Dashboard counts fetched successfully", counts)
