from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from stocktake.core.db import get_db
from stocktake.core.exceptions import AppException
from stocktake.constants.error_codes import ErrorCode
from stocktake.models.enums.user_role import UserRole
from stocktake.utils.check_roles import require_role
from stocktake.utils.get_user import get_current_user
from stocktake.utils.response import success_response, APIResponse
from stocktake.services.masters.storage_location_service import (
    create_storage_location,
    list_storage_locations,
    resolve_location_by_scan,
)
from stocktake.schemas.masters.storage_location_schemas import (
    StorageLocationCreate,
    StorageLocationOut,
    StorageLocationListData,
    QRCodeScanRequest,
)

router = APIRouter(
    prefix="/storage-locations",
    tags=["Storage Locations"],
)


@router.post("/", response_model=APIResponse[StorageLocationOut])
async def create_storage_location_api(
    payload: StorageLocationCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role([UserRole.ADMIN])),
):
    location = await create_storage_location(db, payload, user)
    return success_response("Storage location created successfully", location)


@router.get("/", response_model=APIResponse[StorageLocationListData])
async def list_storage_locations_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
    page: int = Query(1, ge=1),
    page_size: int = Query(100, ge=1, le=500),
):
    data = await list_storage_locations(db, page=page, page_size=page_size)
    return success_response("Storage locations fetched successfully", data)


@router.post("/scan", response_model=APIResponse[StorageLocationOut])
async def scan_storage_location_api(
    payload: QRCodeScanRequest,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    location = await resolve_location_by_scan(db, payload.qr_code)
    if location is None:
        raise AppException(
            404,
            "No storage location matches the scanned QR code",
            ErrorCode.LOCATION_NOT_FOUND,
        )
    return success_response("Storage location resolved", location)
