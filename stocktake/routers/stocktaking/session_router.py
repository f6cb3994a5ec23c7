from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stocktake.core.db import get_db
from stocktake.utils.get_user import get_current_user
from stocktake.utils.response import success_response, APIResponse
from stocktake.services.stocktaking.session_service import (
    create_session,
    complete_session,
    cancel_session,
    list_active_sessions,
    get_session,
)
from stocktake.services.stocktaking.count_service import list_session_records
from stocktake.schemas.stocktaking.session_schemas import (
    SessionCreate,
    SessionOut,
    SessionDetail,
)
from stocktake.schemas.stocktaking.record_schemas import RecordOut

router = APIRouter(
    prefix="/sessions",
    tags=["Stock Taking Sessions"],
)


@router.post("/", response_model=APIResponse[SessionOut])
async def create_session_api(
    payload: SessionCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    session = await create_session(db, payload, user)
    return success_response("Session started", session)


@router.get("/active", response_model=APIResponse[List[SessionOut]])
async def list_active_sessions_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    sessions = await list_active_sessions(db, user.id)
    return success_response("Active sessions fetched successfully", sessions)


@router.get("/{session_id}", response_model=APIResponse[SessionDetail])
async def get_session_api(
    session_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    session = await get_session(db, session_id)
    return success_response("Session fetched successfully", session)


@router.get("/{session_id}/records", response_model=APIResponse[List[RecordOut]])
async def list_session_records_api(
    session_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    records = await list_session_records(db, session_id)
    return success_response("Records fetched successfully", records)


@router.post("/{session_id}/complete", response_model=APIResponse[SessionOut])
async def complete_session_api(
    session_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    session = await complete_session(db, session_id, user)
    return success_response("Session completed", session)


@router.post("/{session_id}/cancel", response_model=APIResponse[SessionOut])
async def cancel_session_api(
    session_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    session = await cancel_session(db, session_id, user)
    return success_response("Session cancelled", session)
