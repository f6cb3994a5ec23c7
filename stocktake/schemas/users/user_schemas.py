from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

from stocktake.models.enums.user_role import UserRole


# =========================
# CREATE
# =========================
class UserCreateSchema(BaseModel):
    username: str = Field(min_length=3, max_length=150)
    email: EmailStr
    password: str = Field(min_length=6)
    role: UserRole


# =========================
# RESPONSE SCHEMAS
# =========================
class UserOut(BaseModel):
    id: int
    username: str
    email: EmailStr
    role: UserRole
    is_active: bool
    last_login: Optional[datetime]
    created_at: datetime
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
