import base64
import json
import zipfile
from io import BytesIO

from openpyxl import Workbook


def valid_row(**overrides) -> dict:
    row = {
        "No": "P1",
        "PART": "Bolt",
        "std_pack": 10,
        "part_name": "Bolt",
        "part_number": "B1",
        "storage": "wh-a-01",
        "qty_std": 100,
        "qty_sisa": 90,
    }
    row.update(overrides)
    return row


def json_payload(rows) -> str:
    return base64.b64encode(json.dumps(rows).encode("utf-8")).decode("ascii")


def xlsx_payload(header, rows) -> str:
    wb = Workbook()
    ws = wb.active
    ws.append(header)
    for row in rows:
        ws.append(row)
    buf = BytesIO()
    wb.save(buf)
    return base64.b64encode(buf.getvalue()).decode("ascii")


def xlsx_with_broken_sheet(header, rows) -> str:
    """A workbook that opens but whose first sheet XML is truncated."""
    source = BytesIO(base64.b64decode(xlsx_payload(header, rows)))
    target = BytesIO()
    with zipfile.ZipFile(source) as src, zipfile.ZipFile(target, "w") as dst:
        for item in src.infolist():
            data = src.read(item.filename)
            if item.filename == "xl/worksheets/sheet1.xml":
                data = data[: len(data) // 2]
            dst.writestr(item, data)
    return base64.b64encode(target.getvalue()).decode("ascii")
