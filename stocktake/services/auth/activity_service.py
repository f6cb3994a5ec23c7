from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, desc, asc

from stocktake.models.support.activity_models import UserActivity
from stocktake.schemas.auth.activity_schemas import (
    UserActivityOut,
    UserActivityFilters,
    UserActivityListData,
)


async def list_user_activities(
    db: AsyncSession,
    filters: UserActivityFilters,
) -> UserActivityListData:
    """Audit trail, newest first unless ``sort_order`` says otherwise."""
    query = select(UserActivity)

    if filters.user_id is not None:
        query = query.where(UserActivity.user_id == filters.user_id)
    if filters.since is not None:
        query = query.where(UserActivity.created_at >= filters.since)

    total = await db.scalar(select(func.count()).select_from(query.subquery()))

    order_fn = desc if filters.sort_order == "desc" else asc
    result = await db.execute(
        query.order_by(order_fn(UserActivity.created_at), order_fn(UserActivity.id))
        .offset((filters.page - 1) * filters.page_size)
        .limit(filters.page_size)
    )

    return UserActivityListData(
        total=total or 0,
        items=[UserActivityOut.model_validate(a) for a in result.scalars().all()],
    )
