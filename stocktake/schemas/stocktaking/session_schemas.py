from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List

from stocktake.models.enums.session_status import SessionStatus
from stocktake.schemas.stocktaking.record_schemas import RecordOut


class SessionCreate(BaseModel):
    user_id: int
    project_id: int
    session_name: str = Field(..., min_length=1, max_length=255)


class SessionOut(BaseModel):
    id: int
    user_id: int
    project_id: int
    session_name: str
    status: SessionStatus
    started_at: datetime
    completed_at: Optional[datetime]
    created_at: datetime

    class Config:
        from_attributes = True


class SessionDetail(SessionOut):
    records: List[RecordOut]
