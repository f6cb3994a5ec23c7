from pydantic import BaseModel
from typing import Optional, List, Literal
from datetime import datetime
from fastapi import Query


class UserActivityFilters(BaseModel):
    user_id: Optional[int] = Query(None)
    since: Optional[datetime] = Query(None)

    page: int = Query(1, ge=1)
    page_size: int = Query(50, ge=1, le=200)

    sort_order: Literal["asc", "desc"] = Query("desc")


class UserActivityOut(BaseModel):
    id: int
    user_id: Optional[int]
    username_snapshot: str
    message: str
    created_at: datetime

    class Config:
        from_attributes = True


class UserActivityListData(BaseModel):
    total: int
    items: List[UserActivityOut]
