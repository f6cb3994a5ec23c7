from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from stocktake.core.db import get_db
from stocktake.models.enums.user_role import UserRole
from stocktake.schemas.users.user_schemas import UserCreateSchema, UserOut
from stocktake.services.users.user_services import create_user, list_users, get_user
from stocktake.utils.check_roles import require_role
from stocktake.utils.response import success_response, APIResponse

router = APIRouter(prefix="/users", tags=["Users"])

ADMIN_ONLY = require_role([UserRole.ADMIN])


@router.post("/", response_model=APIResponse[UserOut])
async def create_user_api(
    payload: UserCreateSchema,
    db: AsyncSession = Depends(get_db),
    admin=Depends(ADMIN_ONLY),
):
    user = await create_user(db, payload, admin)
    return success_response("User created successfully", user)


@router.get("/")
async def list_users_api(
    db: AsyncSession = Depends(get_db),
    admin=Depends(ADMIN_ONLY),
    active_only: bool = Query(False),
):
    data = await list_users(db, active_only=active_only)
    return success_response("Users fetched successfully", data)


@router.get("/{user_id}", response_model=APIResponse[UserOut])
async def get_user_api(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    admin=Depends(ADMIN_ONLY),
):
    user = await get_user(db, user_id)
    return success_response("User fetched successfully", user)
