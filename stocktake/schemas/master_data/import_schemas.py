from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional, List
from decimal import Decimal


# =========================
# REQUEST
# =========================
class MasterDataUploadRequest(BaseModel):
    project_id: int
    file_data: str = Field(..., description="Base64 encoded .xlsx workbook or JSON array of rows")


# =========================
# ROW SHAPES
# =========================
class RawPartRow(BaseModel):
    """One uploaded row exactly as read from the file; values are untyped until validated."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    no: Any = Field(None, alias="No")
    part: Any = Field(None, alias="PART")
    std_pack: Any = None
    part_name: Any = None
    part_number: Any = None
    storage: Any = None
    supplier_code: Any = None
    supplier_name: Any = None
    type: Any = None
    image: Any = None
    qty_std: Any = None
    qty_sisa: Any = None
    remark: Any = None


class PartImportRow(BaseModel):
    no: str
    part: str
    std_pack: Decimal
    part_name: str
    part_number: str
    storage_location_id: int
    supplier_code: Optional[str] = None
    supplier_name: Optional[str] = None
    type: Optional[str] = None
    image: Optional[str] = None
    qty_std: int = Field(ge=0)
    qty_sisa: int = Field(ge=0)
    remark: Optional[str] = None


class RowError(BaseModel):
    row_number: int
    field: str
    message: str

    def __str__(self) -> str:
        return f"Row {self.row_number}: {self.message}"


# =========================
# RESPONSE
# =========================
class ImportSummary(BaseModel):
    success: bool
    imported_count: int
    errors: List[str]
