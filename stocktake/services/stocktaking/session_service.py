from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from stocktake.core.exceptions import AppException
from stocktake.constants.error_codes import ErrorCode
from stocktake.constants.activity_codes import ActivityCode

from stocktake.models.enums.session_status import SessionStatus
from stocktake.models.masters.project_models import Project
from stocktake.models.stocktaking.session_models import StockTakingSession
from stocktake.models.stocktaking.record_models import StockTakingRecord
from stocktake.models.users.user_models import User

from stocktake.schemas.stocktaking.session_schemas import (
    SessionCreate,
    SessionOut,
    SessionDetail,
)
from stocktake.schemas.stocktaking.record_schemas import RecordOut
from stocktake.utils.activity_helpers import emit_activity
from stocktake.utils.logger import get_logger

logger = get_logger(__name__)


async def _get_session_or_404(
    db: AsyncSession,
    session_id: int,
    *,
    for_update: bool = False,
) -> StockTakingSession:
    stmt = select(StockTakingSession).where(StockTakingSession.id == session_id)
    if for_update:
        stmt = stmt.with_for_update()

    session = await db.scalar(stmt)
    if not session:
        raise AppException(
            404,
            f"Stock taking session with id {session_id} not found",
            ErrorCode.SESSION_NOT_FOUND,
        )
    return session


# =====================================================
# CREATE
# =====================================================
async def create_session(
    db: AsyncSession,
    payload: SessionCreate,
    actor: User | None = None,
) -> SessionOut:
    user = await db.get(User, payload.user_id)
    if not user:
        raise AppException(
            404,
            f"User with id {payload.user_id} not found",
            ErrorCode.USER_NOT_FOUND,
        )
    if not user.is_active:
        raise AppException(
            409,
            f"User with id {payload.user_id} is not active",
            ErrorCode.USER_INACTIVE,
        )

    project = await db.get(Project, payload.project_id)
    if not project:
        raise AppException(
            404,
            f"Project with id {payload.project_id} not found",
            ErrorCode.PROJECT_NOT_FOUND,
        )
    if not project.is_active:
        raise AppException(
            409,
            f"Project with id {payload.project_id} is not active",
            ErrorCode.PROJECT_INACTIVE,
        )

    session = StockTakingSession(
        user_id=payload.user_id,
        project_id=payload.project_id,
        session_name=payload.session_name,
        status=SessionStatus.ACTIVE,
        started_at=datetime.now(timezone.utc),
        completed_at=None,
    )

    db.add(session)
    await db.flush()

    await emit_activity(
        db=db,
        actor=actor,
        code=ActivityCode.CREATE_SESSION,
        target_name=session.session_name,
    )

    await db.commit()
    await db.refresh(session)

    logger.info(
        "Stock taking session started",
        extra={"session_id": session.id, "user_id": session.user_id},
    )
    return SessionOut.model_validate(session)


# =====================================================
# STATUS TRANSITIONS
# =====================================================
async def _close_session(
    db: AsyncSession,
    session_id: int,
    target: SessionStatus,
    code: ActivityCode,
    actor: User | None,
) -> SessionOut:
    session = await _get_session_or_404(db, session_id, for_update=True)

    if session.status != SessionStatus.ACTIVE:
        raise AppException(
            409,
            f"Only active sessions can be {target.value.lower()}; "
            f"session {session_id} is {session.status.value}",
            ErrorCode.SESSION_STATE_INVALID,
        )

    session.status = target
    if target == SessionStatus.COMPLETED:
        session.completed_at = datetime.now(timezone.utc)

    await emit_activity(
        db=db,
        actor=actor,
        code=code,
        target_name=session.session_name,
    )

    await db.commit()
    await db.refresh(session)

    logger.info(
        "Stock taking session closed",
        extra={"session_id": session.id, "status": session.status.value},
    )
    return SessionOut.model_validate(session)


async def complete_session(
    db: AsyncSession,
    session_id: int,
    actor: User | None = None,
) -> SessionOut:
    return await _close_session(
        db, session_id, SessionStatus.COMPLETED, ActivityCode.COMPLETE_SESSION, actor
    )


async def cancel_session(
    db: AsyncSession,
    session_id: int,
    actor: User | None = None,
) -> SessionOut:
    return await _close_session(
        db, session_id, SessionStatus.CANCELLED, ActivityCode.CANCEL_SESSION, actor
    )


# =====================================================
# READ
# =====================================================
async def list_active_sessions(db: AsyncSession, user_id: int) -> list[SessionOut]:
    result = await db.execute(
        select(StockTakingSession)
        .where(
            StockTakingSession.user_id == user_id,
            StockTakingSession.status == SessionStatus.ACTIVE,
        )
        .order_by(StockTakingSession.started_at.desc(), StockTakingSession.id.desc())
    )
    return [SessionOut.model_validate(s) for s in result.scalars().all()]


async def get_session(db: AsyncSession, session_id: int) -> SessionDetail:
    session = await _get_session_or_404(db, session_id)

    records = (
        await db.execute(
            select(StockTakingRecord)
            .where(StockTakingRecord.session_id == session_id)
            .order_by(StockTakingRecord.recorded_at, StockTakingRecord.id)
        )
    ).scalars().all()

    return SessionDetail(
        **SessionOut.model_validate(session).model_dump(),
        records=[RecordOut.model_validate(r) for r in records],
    )
