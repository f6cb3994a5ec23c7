from datetime import datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from stocktake.models.enums.session_status import SessionStatus
from stocktake.models.masters.part_models import Part
from stocktake.models.masters.project_models import Project
from stocktake.models.stocktaking.record_models import StockTakingRecord
from stocktake.models.stocktaking.session_models import StockTakingSession
from stocktake.schemas.dashboard_schemas import DashboardCounts

RECENT_WINDOW = timedelta(days=7)


async def get_dashboard_counts(
    db: AsyncSession,
    user_id: int,
    now: datetime | None = None,
) -> DashboardCounts:
    since = (now or datetime.now(timezone.utc)) - RECENT_WINDOW

    total_active_projects = await db.scalar(
        select(func.count(Project.id)).where(Project.is_active.is_(True))
    )

    user_active_sessions = await db.scalar(
        select(func.count(StockTakingSession.id)).where(
            StockTakingSession.user_id == user_id,
            StockTakingSession.status == SessionStatus.ACTIVE,
        )
    )

    total_parts = await db.scalar(
        select(func.count(Part.id))
        .join(Project, Project.id == Part.project_id)
        .where(Project.is_active.is_(True))
    )

    recent_records = await db.scalar(
        select(func.count(StockTakingRecord.id))
        .join(StockTakingSession, StockTakingSession.id == StockTakingRecord.session_id)
        .where(
            StockTakingSession.user_id == user_id,
            StockTakingRecord.recorded_at >= since,
        )
    )

    return DashboardCounts(
        total_active_projects=total_active_projects or 0,
        user_active_sessions=user_active_sessions or 0,
        total_parts_in_active_projects=total_parts or 0,
        records_in_last_7_days=recent_records or 0,
    )
