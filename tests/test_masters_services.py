import pytest

from stocktake.core.exceptions import AppException
from stocktake.constants.error_codes import ErrorCode
from stocktake.schemas.masters.part_schemas import PartQuantityUpdate
from stocktake.schemas.masters.project_schemas import ProjectCreate
from stocktake.schemas.masters.storage_location_schemas import StorageLocationCreate
from stocktake.services.masters.part_service import list_parts_by_project, update_part_quantities
from stocktake.services.masters.project_service import (
    create_project,
    deactivate_project,
    get_project,
    list_projects,
)
from stocktake.services.masters.storage_location_service import (
    create_storage_location,
    list_storage_locations,
    resolve_location_by_scan,
)


# =========================
# PROJECTS
# =========================
async def test_project_lifecycle(db, admin):
    created = await create_project(db, ProjectCreate(name="Plant B"), admin)
    assert created.is_active is True

    assert (await list_projects(db)).total == 1

    deactivated = await deactivate_project(db, created.id, admin)
    assert deactivated.is_active is False
    assert (await list_projects(db)).total == 0
    assert (await get_project(db, created.id)).is_active is False

    with pytest.raises(AppException) as exc:
        await deactivate_project(db, created.id, admin)
    assert exc.value.error_code == ErrorCode.PROJECT_INACTIVE


async def test_get_unknown_project(db):
    with pytest.raises(AppException) as exc:
        await get_project(db, 42)
    assert exc.value.status_code == 404


# =========================
# STORAGE LOCATIONS
# =========================
async def test_duplicate_location_code(db, location):
    with pytest.raises(AppException) as exc:
        await create_storage_location(
            db, StorageLocationCreate(location_code="wh-a-01", location_name="dup")
        )
    assert exc.value.status_code == 409
    assert exc.value.error_code == ErrorCode.LOCATION_CODE_EXISTS


async def test_duplicate_qr_code(db, location):
    with pytest.raises(AppException) as exc:
        await create_storage_location(
            db,
            StorageLocationCreate(
                location_code="WH-B-01", location_name="B", qr_code=location.qr_code
            ),
        )
    assert exc.value.error_code == ErrorCode.LOCATION_QR_EXISTS


async def test_locations_without_qr_code_coexist(db, admin):
    await create_storage_location(db, StorageLocationCreate(location_code="X1", location_name="X1"), admin)
    await create_storage_location(db, StorageLocationCreate(location_code="X2", location_name="X2"), admin)

    assert (await list_storage_locations(db)).total == 2


async def test_resolve_location_by_scan(db, location):
    found = await resolve_location_by_scan(db, "QR-WH-A-01")
    assert found.id == location.id

    assert await resolve_location_by_scan(db, "QR-UNKNOWN") is None


# =========================
# PARTS
# =========================
async def test_list_parts_by_project(db, project, part):
    data = await list_parts_by_project(db, project.id)

    assert data.total == 1
    assert data.items[0].part_number == "B1"

    with pytest.raises(AppException) as exc:
        await list_parts_by_project(db, 999)
    assert exc.value.error_code == ErrorCode.PROJECT_NOT_FOUND


async def test_update_part_quantities(db, part, admin):
    updated = await update_part_quantities(
        db, part.id, PartQuantityUpdate(qty_std=120, version=1), admin
    )

    assert updated.qty_std == 120
    assert updated.qty_sisa == 90
    assert updated.version == 2

    with pytest.raises(AppException) as exc:
        await update_part_quantities(db, part.id, PartQuantityUpdate(qty_std=130, version=1))
    assert exc.value.status_code == 409
    assert exc.value.error_code == ErrorCode.PART_VERSION_CONFLICT


async def test_update_part_without_changes(db, part):
    with pytest.raises(AppException) as exc:
        await update_part_quantities(db, part.id, PartQuantityUpdate(qty_std=100, version=1))
    assert exc.value.status_code == 400
