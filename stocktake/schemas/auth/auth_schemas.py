from pydantic import BaseModel, EmailStr
from typing import Literal

from stocktake.models.enums.user_role import UserRole


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AuthUser(BaseModel):
    id: int
    email: EmailStr
    role: UserRole


class LoginData(BaseModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"
    user: AuthUser
