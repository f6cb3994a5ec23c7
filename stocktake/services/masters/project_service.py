from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from stocktake.models.masters.project_models import Project
from stocktake.models.users.user_models import User
from stocktake.schemas.masters.project_schemas import (
    ProjectCreate,
    ProjectOut,
    ProjectListData,
)
from stocktake.core.exceptions import AppException
from stocktake.constants.error_codes import ErrorCode
from stocktake.constants.activity_codes import ActivityCode
from stocktake.utils.activity_helpers import emit_activity
from stocktake.utils.logger import get_logger

logger = get_logger(__name__)


async def _get_project_or_404(db: AsyncSession, project_id: int) -> Project:
    project = await db.get(Project, project_id)
    if not project:
        raise AppException(
            404,
            f"Project with id {project_id} not found",
            ErrorCode.PROJECT_NOT_FOUND,
        )
    return project


async def create_project(
    db: AsyncSession,
    payload: ProjectCreate,
    user: User | None = None,
) -> ProjectOut:
    logger.info("Create project", extra={"project_name": payload.name})

    project = Project(
        name=payload.name,
        description=payload.description,
        is_active=True,
    )
    db.add(project)
    await db.flush()

    await emit_activity(
        db=db,
        actor=user,
        code=ActivityCode.CREATE_PROJECT,
        target_name=project.name,
    )

    await db.commit()
    await db.refresh(project)
    return ProjectOut.model_validate(project)


async def list_projects(
    db: AsyncSession,
    page: int = 1,
    page_size: int = 50,
) -> ProjectListData:
    query = select(Project).where(Project.is_active.is_(True))

    total = await db.scalar(select(func.count()).select_from(query.subquery()))

    result = await db.execute(
        query.order_by(Project.name, Project.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
    )

    return ProjectListData(
        total=total or 0,
        items=[ProjectOut.model_validate(p) for p in result.scalars().all()],
    )


async def get_project(db: AsyncSession, project_id: int) -> ProjectOut:
    return ProjectOut.model_validate(await _get_project_or_404(db, project_id))


async def deactivate_project(
    db: AsyncSession,
    project_id: int,
    user: User | None = None,
) -> ProjectOut:
    project = await _get_project_or_404(db, project_id)

    if not project.is_active:
        raise AppException(
            409,
            f"Project with id {project_id} is already inactive",
            ErrorCode.PROJECT_INACTIVE,
        )

    project.is_active = False

    await emit_activity(
        db=db,
        actor=user,
        code=ActivityCode.DEACTIVATE_PROJECT,
        target_name=project.name,
    )

    await db.commit()
    await db.refresh(project)
    return ProjectOut.model_validate(project)
