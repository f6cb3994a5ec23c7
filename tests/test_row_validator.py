from decimal import Decimal

import pytest

from stocktake.schemas.master_data.import_schemas import PartImportRow, RowError
from stocktake.services.master_data.row_validator import (
    build_location_lookup,
    display_row_number,
    parse_quantity,
    validate_row,
)
from helpers import valid_row

LOOKUP = build_location_lookup([("WH-A-01", 7), (" Dock-2 ", 9)])


def test_display_row_number_counts_header():
    assert display_row_number(0) == 2
    assert display_row_number(4) == 6


def test_valid_row_matches_location_case_insensitively():
    result = validate_row(valid_row(), 0, LOOKUP)

    assert isinstance(result, PartImportRow)
    assert result.storage_location_id == 7
    assert result.std_pack == Decimal("10")
    assert result.qty_std == 100
    assert result.qty_sisa == 90


def test_lookup_strips_codes():
    result = validate_row(valid_row(storage="dock-2"), 0, LOOKUP)
    assert isinstance(result, PartImportRow)
    assert result.storage_location_id == 9


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"No": None}, "Row 2: No is required"),
        ({"No": "   "}, "Row 2: No is required"),
        ({"No": 12}, "Row 2: No is required"),
        ({"PART": ""}, "Row 2: PART is required"),
        ({"part_name": None}, "Row 2: part_name is required"),
        ({"part_number": None}, "Row 2: part_number is required"),
        ({"storage": None}, "Row 2: storage is required"),
        ({"std_pack": 0}, "Row 2: std_pack must be a positive number"),
        ({"std_pack": "invalid"}, "Row 2: std_pack must be a positive number"),
        ({"std_pack": None}, "Row 2: std_pack must be a positive number"),
        ({"qty_std": -1}, "Row 2: qty_std must be a non-negative integer"),
        ({"qty_std": "abc"}, "Row 2: qty_std must be a non-negative integer"),
        ({"qty_std": 1.5}, "Row 2: qty_std must be a non-negative integer"),
        ({"qty_sisa": -3}, "Row 2: qty_sisa must be a non-negative integer"),
        ({"storage": "NOPE"}, "Row 2: Storage location 'NOPE' not found"),
    ],
)
def test_rejections(overrides, message):
    result = validate_row(valid_row(**overrides), 0, LOOKUP)

    assert isinstance(result, RowError)
    assert str(result) == message


def test_first_failing_check_wins():
    row = valid_row(PART=None, std_pack=-5, qty_std=-1, storage="NOPE")

    result = validate_row(row, 3, LOOKUP)

    assert str(result) == "Row 5: PART is required"
    assert result.field == "PART"


def test_std_pack_checked_before_quantities():
    result = validate_row(valid_row(std_pack="x", qty_sisa=-1), 0, LOOKUP)
    assert result.field == "std_pack"


def test_absent_quantities_default_to_zero():
    row = valid_row()
    del row["qty_std"]
    row["qty_sisa"] = ""

    result = validate_row(row, 0, LOOKUP)

    assert isinstance(result, PartImportRow)
    assert result.qty_std == 0
    assert result.qty_sisa == 0


def test_numeric_strings_are_parsed():
    result = validate_row(valid_row(std_pack="2.5", qty_std="40", qty_sisa=" 3 "), 0, LOOKUP)

    assert isinstance(result, PartImportRow)
    assert result.std_pack == Decimal("2.5")
    assert result.qty_std == 40
    assert result.qty_sisa == 3


def test_unknown_columns_are_ignored():
    result = validate_row(valid_row(project="Some Project"), 0, LOOKUP)
    assert isinstance(result, PartImportRow)


def test_optional_text_blank_becomes_none():
    result = validate_row(valid_row(supplier_code="  ", remark="fragile"), 0, LOOKUP)

    assert result.supplier_code is None
    assert result.remark == "fragile"


def test_non_object_row():
    result = validate_row(["P1", "Bolt"], 0, LOOKUP)

    assert isinstance(result, RowError)
    assert result.field == "row"


def test_validation_is_repeatable():
    row = valid_row(qty_sisa="-2")

    first = validate_row(row, 1, LOOKUP)
    second = validate_row(row, 1, LOOKUP)

    assert str(first) == str(second)


@pytest.mark.parametrize("value", [True, float("nan"), float("inf"), "1e3x"])
def test_parse_quantity_rejects_odd_values(value):
    assert parse_quantity(value) is None
