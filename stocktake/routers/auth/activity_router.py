from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stocktake.core.db import get_db
from stocktake.models.enums.user_role import UserRole
from stocktake.schemas.auth.activity_schemas import UserActivityFilters, UserActivityListData
from stocktake.services.auth.activity_service import list_user_activities
from stocktake.utils.check_roles import require_role
from stocktake.utils.response import success_response, APIResponse

router = APIRouter(prefix="/activities", tags=["User Activities"])


@router.get("/", response_model=APIResponse[UserActivityListData])
async def list_user_activities_api(
    filters: UserActivityFilters = Depends(),
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_role([UserRole.ADMIN])),
):
    result = await list_user_activities(db, filters)
    return success_response("User activities fetched successfully", result)
