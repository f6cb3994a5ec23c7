from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from stocktake.models.users.user_models import User
from stocktake.schemas.auth.auth_schemas import LoginData, AuthUser
from stocktake.core.security import verify_password, create_access_token
from stocktake.core.config import ACCESS_TOKEN_EXPIRE_MINUTES
from stocktake.utils.activity_helpers import emit_activity
from stocktake.constants.activity_codes import ActivityCode
from stocktake.utils.logger import get_logger

logger = get_logger("auth.service")


# =====================================================
# LOGIN
# =====================================================
async def login_user(db: AsyncSession, email: str, password: str) -> LoginData:
    logger.info("Authenticating user", extra={"email": email})

    result = await db.execute(
        select(User).where(User.email == email.lower())
    )
    user = result.scalars().first()

    if not user or not verify_password(password, user.password_hash):
        logger.warning("Invalid credentials", extra={"email": email})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    if not user.is_active:
        logger.warning("Inactive user login blocked", extra={"email": email})
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    user.last_login = datetime.now(timezone.utc)

    access_token = create_access_token(
        subject=user.email,
        token_version=user.token_version,
        role=user.role.value,
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    )

    await emit_activity(
        db=db,
        actor=user,
        code=ActivityCode.LOGIN,
    )

    await db.commit()

    logger.info("Login successful", extra={"user_id": user.id})

    return LoginData(
        access_token=access_token,
        user=AuthUser(id=user.id, email=user.email, role=user.role),
    )
