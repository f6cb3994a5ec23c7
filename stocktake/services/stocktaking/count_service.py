from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update

from stocktake.core.exceptions import AppException
from stocktake.constants.error_codes import ErrorCode

from stocktake.models.enums.session_status import SessionStatus
from stocktake.models.masters.part_models import Part
from stocktake.models.stocktaking.session_models import StockTakingSession
from stocktake.models.stocktaking.record_models import StockTakingRecord

from stocktake.schemas.stocktaking.record_schemas import RecordCreate, RecordOut
from stocktake.utils.logger import get_logger

logger = get_logger(__name__)


# =====================================================
# RECORD COUNT
# =====================================================
async def record_count(db: AsyncSession, payload: RecordCreate) -> RecordOut:
    """Store one counted observation and make it the part's on-hand quantity.

    The difference is always measured against the standard quantity. The
    on-hand write only lands if the part still carries the version that was
    read here; otherwise the record is discarded with a conflict.
    """
    session = await db.get(StockTakingSession, payload.session_id)
    if not session:
        raise AppException(
            404,
            f"Stock taking session with id {payload.session_id} not found",
            ErrorCode.SESSION_NOT_FOUND,
        )
    if session.status != SessionStatus.ACTIVE:
        raise AppException(
            409,
            f"Stock taking session {payload.session_id} is {session.status.value}",
            ErrorCode.SESSION_NOT_ACTIVE,
        )

    part = await db.get(Part, payload.part_id)
    if not part:
        raise AppException(
            404,
            f"Part with id {payload.part_id} not found",
            ErrorCode.PART_NOT_FOUND,
        )

    seen_version = part.version

    record = StockTakingRecord(
        session_id=payload.session_id,
        part_id=payload.part_id,
        qty_counted=payload.qty_counted,
        qty_difference=payload.qty_counted - part.qty_std,
        remark=payload.remark,
        recorded_at=datetime.now(timezone.utc),
    )
    db.add(record)
    await db.flush()

    result = await db.execute(
        update(Part)
        .where(
            Part.id == payload.part_id,
            Part.version == seen_version,
        )
        .values(
            qty_sisa=payload.qty_counted,
            version=Part.version + 1,
        )
        .returning(Part.id)
    )

    if result.scalar_one_or_none() is None:
        await db.rollback()
        logger.warning(
            "Stale part version on count",
            extra={"part_id": payload.part_id, "seen_version": seen_version},
        )
        raise AppException(
            409,
            "Part modified by another process",
            ErrorCode.PART_VERSION_CONFLICT,
        )

    await db.commit()
    await db.refresh(record)

    logger.info(
        "Count recorded",
        extra={
            "session_id": record.session_id,
            "part_id": record.part_id,
            "qty_difference": record.qty_difference,
        },
    )
    return RecordOut.model_validate(record)


# =====================================================
# LIST
# =====================================================
async def list_session_records(db: AsyncSession, session_id: int) -> list[RecordOut]:
    exists = await db.scalar(
        select(StockTakingSession.id).where(StockTakingSession.id == session_id)
    )
    if not exists:
        raise AppException(
            404,
            f"Stock taking session with id {session_id} not found",
            ErrorCode.SESSION_NOT_FOUND,
        )

    result = await db.execute(
        select(StockTakingRecord)
        .where(StockTakingRecord.session_id == session_id)
        .order_by(StockTakingRecord.recorded_at, StockTakingRecord.id)
    )
    return [RecordOut.model_validate(r) for r in result.scalars().all()]
