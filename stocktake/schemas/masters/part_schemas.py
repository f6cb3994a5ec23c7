from pydantic import BaseModel, Field
from typing import Optional, List
from decimal import Decimal
from datetime import datetime


class PartQuantityUpdate(BaseModel):
    qty_std: Optional[int] = Field(default=None, ge=0)
    qty_sisa: Optional[int] = Field(default=None, ge=0)
    remark: Optional[str] = None

    version: int


class PartOut(BaseModel):
    id: int
    no: str
    part: str
    std_pack: Decimal
    project_id: int
    part_name: str
    part_number: str
    storage_location_id: int
    supplier_code: Optional[str]
    supplier_name: Optional[str]
    type: Optional[str]
    image: Optional[str]
    qty_std: int
    qty_sisa: int
    remark: Optional[str]
    version: int

    created_at: datetime
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class PartListData(BaseModel):
    total: int
    items: List[PartOut]
