from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from stocktake.core.db import Base
from stocktake.models.base.mixins import TimestampMixin
from stocktake.models.enums.user_role import UserRole


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(150), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.STOCK_TAKER)
    is_active = Column(Boolean, default=True, nullable=False)
    token_version = Column(Integer, nullable=False, default=0)
    last_login = Column(DateTime(timezone=True))

    def __repr__(self):
        return f"<User id={self.id} username={self.username} role={self.role}>"
