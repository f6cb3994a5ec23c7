from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.sql import func


class CreatedAtMixin:
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )


class TimestampMixin(CreatedAtMixin):
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )


class VersionMixin:
    """Optimistic-lock counter; every guarded UPDATE matches on it and bumps it."""

    version = Column(Integer, nullable=False, default=1)
