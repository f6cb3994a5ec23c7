from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func

from stocktake.models.masters.part_models import Part
from stocktake.models.masters.project_models import Project
from stocktake.models.users.user_models import User
from stocktake.schemas.masters.part_schemas import (
    PartQuantityUpdate,
    PartOut,
    PartListData,
)
from stocktake.core.exceptions import AppException
from stocktake.constants.error_codes import ErrorCode
from stocktake.constants.activity_codes import ActivityCode
from stocktake.utils.activity_helpers import emit_activity
from stocktake.utils.logger import get_logger

logger = get_logger(__name__)


async def list_parts_by_project(
    db: AsyncSession,
    project_id: int,
    page: int = 1,
    page_size: int = 100,
) -> PartListData:
    project = await db.get(Project, project_id)
    if not project:
        raise AppException(
            404,
            f"Project with id {project_id} not found",
            ErrorCode.PROJECT_NOT_FOUND,
        )

    query = select(Part).where(Part.project_id == project_id)

    total = await db.scalar(select(func.count()).select_from(query.subquery()))

    result = await db.execute(
        query.order_by(Part.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
    )

    return PartListData(
        total=total or 0,
        items=[PartOut.model_validate(p) for p in result.scalars().all()],
    )


async def update_part_quantities(
    db: AsyncSession,
    part_id: int,
    payload: PartQuantityUpdate,
    user: User | None = None,
) -> PartOut:
    current = await db.get(Part, part_id)
    if not current:
        raise AppException(
            404,
            f"Part with id {part_id} not found",
            ErrorCode.PART_NOT_FOUND,
        )

    updates = payload.model_dump(exclude_unset=True, exclude={"version"})
    if not updates:
        raise AppException(
            400,
            "No changes detected",
            ErrorCode.VALIDATION_ERROR,
        )

    # -------------------------------------------------
    # CHANGE TRACKING
    # -------------------------------------------------
    changes: list[str] = []
    for k, v in updates.items():
        old = getattr(current, k)
        if old != v:
            changes.append(f"{k}: {old} -> {v}")

    if not changes:
        raise AppException(
            400,
            "No actual changes detected",
            ErrorCode.VALIDATION_ERROR,
        )

    stmt = (
        update(Part)
        .where(
            Part.id == part_id,
            Part.version == payload.version,
        )
        .values(
            **updates,
            version=Part.version + 1,
        )
        .returning(Part)
        .execution_options(populate_existing=True)
    )

    result = await db.execute(stmt)
    part = result.scalar_one_or_none()

    if not part:
        await db.rollback()
        raise AppException(
            409,
            "Part modified by another process",
            ErrorCode.PART_VERSION_CONFLICT,
        )

    await emit_activity(
        db=db,
        actor=user,
        code=ActivityCode.UPDATE_PART_QUANTITIES,
        target_name=part.part_number,
        changes=", ".join(changes),
    )

    await db.commit()
    await db.refresh(part)
    return PartOut.model_validate(part)
