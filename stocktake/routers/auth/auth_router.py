from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stocktake.core.db import get_db
from stocktake.schemas.auth.auth_schemas import LoginRequest, LoginData
from stocktake.schemas.users.user_schemas import UserOut
from stocktake.services.auth.auth_service import login_user
from stocktake.utils.get_user import get_current_user
from stocktake.utils.response import success_response, APIResponse
from stocktake.utils.logger import get_logger

logger = get_logger("auth.router")

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=APIResponse[LoginData])
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    logger.info("Login attempt", extra={"email": payload.email})

    data = await login_user(db, payload.email, payload.password)
    return success_response("Login successful", data)


@router.get("/me", response_model=APIResponse[UserOut])
async def me(current_user=Depends(get_current_user)):
    return success_response("Current user", UserOut.model_validate(current_user))
