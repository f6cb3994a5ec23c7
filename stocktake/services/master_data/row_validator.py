"""Validation of a single master-data row.

Checks run in a fixed order and the first failing check decides the row's
error, so a row with several problems reports only one of them. The
validator is pure: the same row and lookup always produce the same verdict.
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Mapping, Optional

from stocktake.schemas.master_data.import_schemas import (
    PartImportRow,
    RawPartRow,
    RowError,
)

HEADER_ROWS = 1

# (attribute on RawPartRow, column name used in messages)
REQUIRED_TEXT_COLUMNS = (
    ("no", "No"),
    ("part", "PART"),
    ("part_name", "part_name"),
    ("part_number", "part_number"),
    ("storage", "storage"),
)

OPTIONAL_TEXT_COLUMNS = ("supplier_code", "supplier_name", "type", "image", "remark")


def display_row_number(index: int) -> int:
    """Spreadsheet row for the ``index``-th data row (1-based, header included)."""
    return index + 1 + HEADER_ROWS


# =====================================================
# COERCION
# =====================================================
def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _present_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _to_decimal(value: Any) -> Decimal | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return Decimal(str(value))
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation:
            return None
    return None


def parse_positive_number(value: Any) -> Decimal | None:
    number = _to_decimal(value)
    if number is None or not number.is_finite() or number <= 0:
        return None
    return number


def parse_quantity(value: Any) -> int | None:
    """Non-negative integer, 0 for a genuinely absent cell, ``None`` when invalid."""
    if _is_blank(value):
        return 0
    number = _to_decimal(value)
    if number is None or not number.is_finite():
        return None
    if number != number.to_integral_value() or number < 0:
        return None
    return int(number)


def _optional_text(value: Any) -> str | None:
    if _is_blank(value):
        return None
    return value if isinstance(value, str) else str(value)


# =====================================================
# CHECK CHAIN
# =====================================================
Check = Callable[[RawPartRow, dict], Optional[str]]


def _required_text_check(attr: str, column: str) -> Check:
    def check(row: RawPartRow, _parsed: dict) -> str | None:
        if not _present_text(getattr(row, attr)):
            return f"{column} is required"
        return None

    return check


def _std_pack_check(row: RawPartRow, parsed: dict) -> str | None:
    parsed["std_pack"] = parse_positive_number(row.std_pack)
    if parsed["std_pack"] is None:
        return "std_pack must be a positive number"
    return None


def _quantity_check(column: str) -> Check:
    def check(row: RawPartRow, parsed: dict) -> str | None:
        parsed[column] = parse_quantity(getattr(row, column))
        if parsed[column] is None:
            return f"{column} must be a non-negative integer"
        return None

    return check


def _location_check(lookup: Mapping[str, int]) -> Check:
    def check(row: RawPartRow, parsed: dict) -> str | None:
        parsed["storage_location_id"] = lookup.get(row.storage.strip().lower())
        if parsed["storage_location_id"] is None:
            return f"Storage location '{row.storage}' not found"
        return None

    return check


def _checks(lookup: Mapping[str, int]) -> list[tuple[str, Check]]:
    """Ordered (column, check) pairs; order decides which error a bad row reports."""
    return [
        *((column, _required_text_check(attr, column)) for attr, column in REQUIRED_TEXT_COLUMNS),
        ("std_pack", _std_pack_check),
        ("qty_std", _quantity_check("qty_std")),
        ("qty_sisa", _quantity_check("qty_sisa")),
        ("storage", _location_check(lookup)),
    ]


def validate_row(
    raw: Mapping[str, Any],
    index: int,
    location_lookup: Mapping[str, int],
) -> PartImportRow | RowError:
    """Validate the ``index``-th (0-based) data row against a lowercase code -> id lookup."""
    row_number = display_row_number(index)

    if not isinstance(raw, Mapping):
        return RowError(row_number=row_number, field="row", message="Row must be an object")

    row = RawPartRow.model_validate(dict(raw))
    parsed: dict = {}

    for column, check in _checks(location_lookup):
        message = check(row, parsed)
        if message is not None:
            return RowError(row_number=row_number, field=column, message=message)

    return PartImportRow(
        no=row.no,
        part=row.part,
        std_pack=parsed["std_pack"],
        part_name=row.part_name,
        part_number=row.part_number,
        storage_location_id=parsed["storage_location_id"],
        qty_std=parsed["qty_std"],
        qty_sisa=parsed["qty_sisa"],
        **{column: _optional_text(getattr(row, column)) for column in OPTIONAL_TEXT_COLUMNS},
    )


def build_location_lookup(locations) -> dict[str, int]:
    """``(location_code, id)`` pairs -> case-insensitive code lookup."""
    return {code.strip().lower(): location_id for code, location_id in locations}
