from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stocktake.core.db import get_db
from stocktake.models.enums.user_role import UserRole
from stocktake.utils.check_roles import require_role
from stocktake.utils.response import success_response, APIResponse
from stocktake.services.masters.part_service import update_part_quantities
from stocktake.schemas.masters.part_schemas import PartQuantityUpdate, PartOut

router = APIRouter(
    prefix="/parts",
    tags=["Parts"],
)


@router.patch("/{part_id}", response_model=APIResponse[PartOut])
async def update_part_api(
    part_id: int,
    payload: PartQuantityUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role([UserRole.ADMIN])),
):
    part = await update_part_quantities(db, part_id, payload, user)
    return success_response("Part updated successfully", part)
