from stocktake.schemas.reports.report_schemas import ReportRow

# (header, ReportRow attribute)
REPORT_COLUMNS = [
    ("Session", "session_name"),
    ("Status", "session_status"),
    ("Started", "session_started_at"),
    ("User", "user_username"),
    ("Project", "project_name"),
    ("No", "part_no"),
    ("Part Name", "part_name"),
    ("Part Number", "part_number"),
    ("Location", "location_code"),
    ("Std Pack", "std_pack"),
    ("Qty Std", "qty_std"),
    ("Qty Counted", "qty_counted"),
    ("Difference", "qty_difference"),
    ("Qty Sisa", "qty_sisa"),
    ("Recorded", "recorded_at"),
    ("Remark", "record_remark"),
]


def cell_value(row: ReportRow, attr: str):
    value = getattr(row, attr)
    if value is None:
        return ""
    if hasattr(value, "value"):
        return value.value
    if hasattr(value, "strftime"):
        return value.strftime("%d-%m-%Y %H:%M")
    return value
