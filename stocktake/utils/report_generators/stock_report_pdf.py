# stocktake/utils/report_generators/stock_report_pdf.py
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from stocktake.schemas.reports.report_schemas import ReportData
from stocktake.utils.report_generators.report_columns import REPORT_COLUMNS, cell_value


def generate_stock_report_pdf(data: ReportData, file_path: str) -> str:
    """
    Render the stock taking report rows as a landscape table.
    """
    styles = getSampleStyleSheet()
    cell_style = styles["BodyText"]
    cell_style.fontSize = 7
    cell_style.leading = 8
    story = []

    # -----------------------------
    # HEADER
    # -----------------------------
    story.append(Paragraph("<b>STOCK TAKING REPORT</b>", styles["Title"]))
    story.append(Spacer(1, 8))
    story.append(Paragraph(f"File: {escape(data.filename)}", styles["Normal"]))
    story.append(Paragraph(f"Records: {len(data.rows)}", styles["Normal"]))
    story.append(Spacer(1, 15))

    # -----------------------------
    # RECORDS
    # -----------------------------
    if not data.rows:
        story.append(Paragraph("No records match the selected filters.", styles["Italic"]))
    else:
        table_data = [[header for header, _ in REPORT_COLUMNS]]
        for row in data.rows:
            table_data.append([
                Paragraph(escape(str(cell_value(row, attr))), cell_style)
                for _, attr in REPORT_COLUMNS
            ])

        table = Table(table_data, repeatRows=1)
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
            ("FONTSIZE", (0, 0), (-1, 0), 7),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ]))
        story.append(table)
        story.append(Spacer(1, 20))

        # -----------------------------
        # SUMMARY
        # -----------------------------
        net = sum(row.qty_difference for row in data.rows)
        mismatched = sum(1 for row in data.rows if row.qty_difference != 0)
        story.append(Paragraph("<b>Summary:</b>", styles["Heading3"]))
        story.append(Paragraph(f"Records with a difference: {mismatched}", styles["Normal"]))
        story.append(Paragraph(f"Net difference: {net}", styles["Normal"]))

    doc = SimpleDocTemplate(file_path, pagesize=landscape(A4))
    doc.build(story)

    return file_path
