from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from stocktake.models.masters.storage_location_models import StorageLocation
from stocktake.models.users.user_models import User
from stocktake.schemas.masters.storage_location_schemas import (
    StorageLocationCreate,
    StorageLocationOut,
    StorageLocationListData,
)
from stocktake.core.exceptions import AppException
from stocktake.constants.error_codes import ErrorCode
from stocktake.constants.activity_codes import ActivityCode
from stocktake.utils.activity_helpers import emit_activity
from stocktake.utils.logger import get_logger

logger = get_logger(__name__)


async def create_storage_location(
    db: AsyncSession,
    payload: StorageLocationCreate,
    user: User | None = None,
) -> StorageLocationOut:
    logger.info("Create storage location", extra={"location_code": payload.location_code})

    # -------------------------------------------------
    # UNIQUE CHECKS (pre-validation)
    # -------------------------------------------------
    code_taken = await db.scalar(
        select(StorageLocation.id).where(
            func.lower(StorageLocation.location_code) == payload.location_code.strip().lower()
        )
    )
    if code_taken:
        raise AppException(
            409,
            f"Storage location code '{payload.location_code}' already exists",
            ErrorCode.LOCATION_CODE_EXISTS,
        )

    if payload.qr_code:
        qr_taken = await db.scalar(
            select(StorageLocation.id).where(StorageLocation.qr_code == payload.qr_code)
        )
        if qr_taken:
            raise AppException(
                409,
                "QR code is already assigned to another storage location",
                ErrorCode.LOCATION_QR_EXISTS,
            )

    location = StorageLocation(
        location_code=payload.location_code.strip(),
        location_name=payload.location_name,
        qr_code=payload.qr_code or None,
    )

    try:
        db.add(location)
        await db.flush()
    except IntegrityError:
        # race-condition safety net
        await db.rollback()
        raise AppException(
            409,
            "Storage location already exists",
            ErrorCode.LOCATION_CODE_EXISTS,
        )

    await emit_activity(
        db=db,
        actor=user,
        code=ActivityCode.CREATE_LOCATION,
        target_name=location.location_code,
    )

    await db.commit()
    await db.refresh(location)
    return StorageLocationOut.model_validate(location)


async def list_storage_locations(
    db: AsyncSession,
    page: int = 1,
    page_size: int = 100,
) -> StorageLocationListData:
    query = select(StorageLocation)

    total = await db.scalar(select(func.count()).select_from(query.subquery()))

    result = await db.execute(
        query.order_by(StorageLocation.location_code)
        .offset((page - 1) * page_size)
        .limit(page_size)
    )

    return StorageLocationListData(
        total=total or 0,
        items=[StorageLocationOut.model_validate(l) for l in result.scalars().all()],
    )


async def resolve_location_by_scan(
    db: AsyncSession,
    qr_code: str,
) -> StorageLocationOut | None:
    """Location whose QR code matches the scanned value, or ``None``."""
    location = await db.scalar(
        select(StorageLocation).where(StorageLocation.qr_code == qr_code.strip())
    )
    if not location:
        logger.info("Unknown QR code scanned", extra={"qr_code": qr_code})
        return None
    return StorageLocationOut.model_validate(location)
