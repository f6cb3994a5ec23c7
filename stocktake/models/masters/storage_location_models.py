from sqlalchemy import Column, Integer, String
from stocktake.core.db import Base
from stocktake.models.base.mixins import CreatedAtMixin


class StorageLocation(Base, CreatedAtMixin):
    __tablename__ = "storage_locations"

    id = Column(Integer, primary_key=True)
    location_code = Column(String(50), nullable=False, unique=True, index=True)  # human code used by import files
    location_name = Column(String(255), nullable=False)
    qr_code = Column(String(255), nullable=True, unique=True, index=True)

    def __repr__(self):
        return f"<StorageLocation id={self.id} code={self.location_code}>"
