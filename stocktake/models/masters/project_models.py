from sqlalchemy import Column, Integer, String, Boolean, Index
from stocktake.core.db import Base
from stocktake.models.base.mixins import TimestampMixin


class Project(Base, TimestampMixin):
    """Owns parts and counting sessions. Deactivation is a flag, rows are never deleted."""

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (Index("ix_project_active", "is_active"),)

    def __repr__(self):
        return f"<Project id={self.id} name={self.name} active={self.is_active}>"
