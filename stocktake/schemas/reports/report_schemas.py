import enum
from pydantic import BaseModel, field_validator
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, List

from stocktake.models.enums.session_status import SessionStatus


class ReportFormat(str, enum.Enum):
    PDF = "PDF"
    XLS = "XLS"


class ReportRequest(BaseModel):
    project_id: Optional[int] = None
    session_id: Optional[int] = None
    format: ReportFormat
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None

    @field_validator("date_from", "date_to")
    @classmethod
    def as_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Session start times are stored in UTC; naive bounds are read as UTC."""
        if v is None:
            return v
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


# -------------------------
# ROW (session x user x project x record x part x location)
# -------------------------
class ReportRow(BaseModel):
    session_id: int
    session_name: str
    session_status: SessionStatus
    session_started_at: datetime
    session_completed_at: Optional[datetime]
    user_username: str
    project_name: str
    part_no: str
    part_name: str
    part_number: str
    location_code: str
    location_name: str
    qty_std: int
    qty_sisa: int
    qty_counted: int
    qty_difference: int
    record_remark: Optional[str]
    recorded_at: datetime
    std_pack: Decimal

    class Config:
        from_attributes = True


class ReportData(BaseModel):
    filename: str
    format: ReportFormat
    rows: List[ReportRow]
