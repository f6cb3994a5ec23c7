from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from stocktake.core.db import get_db
from stocktake.models.enums.user_role import UserRole
from stocktake.utils.check_roles import require_role
from stocktake.utils.get_user import get_current_user
from stocktake.utils.response import success_response, APIResponse
from stocktake.services.masters.project_service import (
    create_project,
    list_projects,
    get_project,
    deactivate_project,
)
from stocktake.services.masters.part_service import list_parts_by_project
from stocktake.schemas.masters.project_schemas import (
    ProjectCreate,
    ProjectOut,
    ProjectListData,
)
from stocktake.schemas.masters.part_schemas import PartListData

router = APIRouter(
    prefix="/projects",
    tags=["Projects"],
)


# =========================
# CREATE
# =========================
@router.post("/", response_model=APIResponse[ProjectOut])
async def create_project_api(
    payload: ProjectCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role([UserRole.ADMIN])),
):
    project = await create_project(db, payload, user)
    return success_response("Project created successfully", project)


# =========================
# LIST / GET
# =========================
@router.get("/", response_model=APIResponse[ProjectListData])
async def list_projects_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
):
    data = await list_projects(db, page=page, page_size=page_size)
    return success_response("Projects fetched successfully", data)


@router.get("/{project_id}", response_model=APIResponse[ProjectOut])
async def get_project_api(
    project_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    project = await get_project(db, project_id)
    return success_response("Project fetched successfully", project)


@router.get("/{project_id}/parts", response_model=APIResponse[PartListData])
async def list_project_parts_api(
    project_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
    page: int = Query(1, ge=1),
    page_size: int = Query(100, ge=1, le=500),
):
    data = await list_parts_by_project(db, project_id, page=page, page_size=page_size)
    return success_response("Parts fetched successfully", data)


# =========================
# DEACTIVATE
# =========================
@router.patch("/{project_id}/deactivate", response_model=APIResponse[ProjectOut])
async def deactivate_project_api(
    project_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role([UserRole.ADMIN])),
):
    project = await deactivate_project(db, project_id, user)
    return success_response("Project deactivated successfully", project)
