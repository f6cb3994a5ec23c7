# stocktake/utils/report_generators/stock_report_xlsx.py
from decimal import Decimal

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from stocktake.schemas.reports.report_schemas import ReportData
from stocktake.utils.report_generators.report_columns import REPORT_COLUMNS, cell_value


def generate_stock_report_xlsx(data: ReportData, file_path: str) -> str:
    wb = Workbook()
    ws = wb.active
    ws.title = "Stock Report"

    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)

    for col, (header, _) in enumerate(REPORT_COLUMNS, start=1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.border = border

    for row_idx, row in enumerate(data.rows, start=2):
        for col, (_, attr) in enumerate(REPORT_COLUMNS, start=1):
            value = cell_value(row, attr)
            if isinstance(value, Decimal):
                value = float(value)
            cell = ws.cell(row=row_idx, column=col, value=value)
            cell.border = border

    # Auto-size columns
    for col, (header, attr) in enumerate(REPORT_COLUMNS, start=1):
        longest = max(
            [len(header)] + [len(str(cell_value(r, attr))) for r in data.rows]
        )
        ws.column_dimensions[get_column_letter(col)].width = min(longest + 2, 50)

    ws.freeze_panes = "A2"
    wb.save(file_path)

    return file_path
