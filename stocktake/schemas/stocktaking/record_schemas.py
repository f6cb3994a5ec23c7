from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class RecordCreate(BaseModel):
    session_id: int
    part_id: int
    qty_counted: int = Field(ge=0)
    remark: Optional[str] = None


class RecordOut(BaseModel):
    id: int
    session_id: int
    part_id: int
    qty_counted: int
    qty_difference: int
    remark: Optional[str]
    recorded_at: datetime
    created_at: datetime

    class Config:
        from_attributes = True
