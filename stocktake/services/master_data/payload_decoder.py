"""Turns an uploaded master-data payload into an ordered list of raw rows.

Two encodings are accepted, both base64 on the wire:

* an ``.xlsx`` workbook: first sheet, first row is the header;
* a UTF-8 JSON array of row objects keyed by the same column names.
"""

import base64
import binascii
import json
import zipfile
from io import BytesIO
from xml.etree.ElementTree import ParseError
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from stocktake.utils.logger import get_logger

logger = get_logger(__name__)

XLSX_MAGIC = b"PK\x03\x04"

# Excel stores codes like "0012" or 12 interchangeably; these columns are always text.
TEXT_COLUMNS = {
    "No", "PART", "part_name", "part_number", "storage",
    "supplier_code", "supplier_name", "type", "image", "remark",
}


class MalformedPayloadError(ValueError):
    """The payload cannot be decoded into rows."""


def encode_payload(content: bytes) -> str:
    return base64.b64encode(content).decode("ascii")


def decode_rows(file_data: str) -> list[dict[str, Any]]:
    try:
        content = base64.b64decode(file_data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedPayloadError("Payload is not valid base64") from e

    if content.startswith(XLSX_MAGIC):
        return _rows_from_workbook(content)
    return _rows_from_json(content)


def _rows_from_json(content: bytes) -> list[dict[str, Any]]:
    try:
        data = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedPayloadError("Payload is not a JSON document") from e

    if not isinstance(data, list):
        raise MalformedPayloadError("Payload must be a list of rows")

    return data


def _cell_text(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _rows_from_workbook(content: bytes) -> list[dict[str, Any]]:
    try:
        workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError, ValueError) as e:
        raise MalformedPayloadError("Payload is not a readable workbook") from e

    # read-only sheets are parsed lazily, so a broken sheet only surfaces while iterating
    try:
        sheet = workbook.worksheets[0]
        rows = _sheet_rows(sheet)
    except (ParseError, IndexError, KeyError, ValueError) as e:
        raise MalformedPayloadError("Workbook sheet cannot be parsed") from e
    finally:
        workbook.close()

    logger.debug("Decoded workbook", extra={"sheet": sheet.title, "rows": len(rows)})
    return rows


def _sheet_rows(sheet) -> list[dict[str, Any]]:
    values = sheet.iter_rows(values_only=True)

    header = next(values, None)
    if header is None:
        return []
    columns = [str(h).strip() if h is not None else None for h in header]

    rows = []
    for raw in values:
        if raw is None or all(v is None or (isinstance(v, str) and not v.strip()) for v in raw):
            continue
        row = {}
        for column, value in zip(columns, raw):
            if not column:
                continue
            row[column] = _cell_text(value) if column in TEXT_COLUMNS else value
        rows.append(row)
    return rows
