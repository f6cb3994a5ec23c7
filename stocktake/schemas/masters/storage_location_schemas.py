from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class StorageLocationCreate(BaseModel):
    location_code: str = Field(..., min_length=1, max_length=50)
    location_name: str = Field(..., min_length=1, max_length=255)
    qr_code: Optional[str] = Field(None, max_length=255)


class StorageLocationOut(BaseModel):
    id: int
    location_code: str
    location_name: str
    qr_code: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class StorageLocationListData(BaseModel):
    total: int
    items: List[StorageLocationOut]


class QRCodeScanRequest(BaseModel):
    qr_code: str = Field(..., min_length=1)
