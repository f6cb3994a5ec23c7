from sqlalchemy import Column, Integer, String, DateTime, Enum, ForeignKey, Index
from sqlalchemy.sql import func
from stocktake.core.db import Base
from stocktake.models.base.mixins import CreatedAtMixin
from stocktake.models.enums.session_status import SessionStatus


class StockTakingSession(Base, CreatedAtMixin):
    """One user's counting run against one project. COMPLETED and CANCELLED are terminal."""

    __tablename__ = "stock_taking_sessions"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="RESTRICT"), nullable=False, index=True)
    session_name = Column(String(255), nullable=False)
    status = Column(Enum(SessionStatus, name="session_status"), nullable=False, default=SessionStatus.ACTIVE, index=True)
    started_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (Index("ix_session_user_status", "user_id", "status"),)

    def __repr__(self):
        return f"<StockTakingSession id={self.id} user_id={self.user_id} project_id={self.project_id} status={self.status}>"
