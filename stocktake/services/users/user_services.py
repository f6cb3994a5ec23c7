from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from stocktake.models.users.user_models import User
from stocktake.schemas.users.user_schemas import UserCreateSchema, UserOut
from stocktake.core.security import hash_password
from stocktake.utils.activity_helpers import emit_activity
from stocktake.constants.activity_codes import ActivityCode
from stocktake.core.exceptions import AppException
from stocktake.constants.error_codes import ErrorCode
from stocktake.utils.logger import get_logger

logger = get_logger(__name__)


# =========================
# CREATE USER
# =========================
async def create_user(
    db: AsyncSession,
    payload: UserCreateSchema,
    admin: User | None = None,
) -> UserOut:
    email = payload.email.lower()

    if await db.scalar(select(User.id).where(User.email == email)):
        raise AppException(409, "Email already registered", ErrorCode.USER_EMAIL_EXISTS)

    if await db.scalar(select(User.id).where(User.username == payload.username)):
        raise AppException(409, "Username already taken", ErrorCode.USER_USERNAME_EXISTS)

    user = User(
        username=payload.username,
        email=email,
        password_hash=hash_password(payload.password),
        role=payload.role,
    )

    try:
        db.add(user)
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise AppException(409, "User already exists", ErrorCode.USER_EMAIL_EXISTS)

    await emit_activity(
        db=db,
        actor=admin,
        code=ActivityCode.CREATE_USER,
        target_email=user.email,
        target_role=user.role.value.replace("_", " ").title(),
    )

    await db.commit()
    await db.refresh(user)

    logger.info("User created", extra={"user_id": user.id})
    return UserOut.model_validate(user)


# =========================
# LIST USERS
# =========================
async def list_users(
    db: AsyncSession,
    active_only: bool = False,
) -> dict:
    stmt = select(User)
    if active_only:
        stmt = stmt.where(User.is_active.is_(True))

    total = await db.scalar(select(func.count()).select_from(stmt.subquery()))
    result = await db.execute(stmt.order_by(User.username))

    return {
        "total": total or 0,
        "items": [UserOut.model_validate(u) for u in result.scalars().all()],
    }


async def get_user(db: AsyncSession, user_id: int) -> UserOut:
    user = await db.get(User, user_id)
    if not user:
        raise AppException(404, f"User with id {user_id} not found", ErrorCode.USER_NOT_FOUND)
    return UserOut.model_validate(user)
