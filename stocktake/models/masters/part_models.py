from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, CheckConstraint, Index
from stocktake.core.db import Base
from stocktake.models.base.mixins import TimestampMixin, VersionMixin


class Part(Base, TimestampMixin, VersionMixin):
    """Master-data line item. qty_std is the expected count, qty_sisa the live on-hand count."""

    __tablename__ = "parts"

    id = Column(Integer, primary_key=True)
    no = Column(String(100), nullable=False)
    part = Column(String(255), nullable=False)
    std_pack = Column(Numeric(10, 2), nullable=False)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="RESTRICT"), nullable=False, index=True)
    part_name = Column(String(255), nullable=False)
    part_number = Column(String(100), nullable=False, index=True)
    storage_location_id = Column(Integer, ForeignKey("storage_locations.id", ondelete="RESTRICT"), nullable=False, index=True)
    supplier_code = Column(String(100), nullable=True)
    supplier_name = Column(String(255), nullable=True)
    type = Column(String(100), nullable=True)
    image = Column(String(500), nullable=True)
    qty_std = Column(Integer, nullable=False, default=0)
    qty_sisa = Column(Integer, nullable=False, default=0)
    remark = Column(String, nullable=True)

    __table_args__ = (
        CheckConstraint("std_pack > 0", name="ck_part_std_pack_positive"),
        CheckConstraint("qty_std >= 0", name="ck_part_qty_std_non_negative"),
        CheckConstraint("qty_sisa >= 0", name="ck_part_qty_sisa_non_negative"),
        Index("ix_part_project_location", "project_id", "storage_location_id"),
    )

    def __repr__(self):
        return f"<Part id={self.id} part_number={self.part_number} qty_std={self.qty_std} qty_sisa={self.qty_sisa}>"
