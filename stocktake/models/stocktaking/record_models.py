from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.sql import func
from stocktake.core.db import Base
from stocktake.models.base.mixins import CreatedAtMixin


class StockTakingRecord(Base, CreatedAtMixin):
    """Counted observation of a part. APPEND-ONLY. Never updated, never deleted."""

    __tablename__ = "stock_taking_records"

    id = Column(Integer, primary_key=True)
    session_id = Column(Integer, ForeignKey("stock_taking_sessions.id", ondelete="RESTRICT"), nullable=False, index=True)
    part_id = Column(Integer, ForeignKey("parts.id", ondelete="RESTRICT"), nullable=False, index=True)
    qty_counted = Column(Integer, nullable=False)
    qty_difference = Column(Integer, nullable=False)  # qty_counted - part.qty_std at record time
    remark = Column(String, nullable=True)
    recorded_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    __table_args__ = (
        CheckConstraint("qty_counted >= 0", name="ck_record_qty_counted_non_negative"),
        Index("ix_record_session_part", "session_id", "part_id"),
    )

    def __repr__(self):
        return f"<StockTakingRecord id={self.id} session_id={self.session_id} part_id={self.part_id} diff={self.qty_difference}>"
