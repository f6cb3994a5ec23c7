import os
from datetime import datetime, timedelta, timezone

from openpyxl import load_workbook

from stocktake.models.enums.session_status import SessionStatus
from stocktake.models.stocktaking.session_models import StockTakingSession
from stocktake.schemas.reports.report_schemas import ReportFormat, ReportRequest
from stocktake.schemas.stocktaking.record_schemas import RecordCreate
from stocktake.schemas.stocktaking.session_schemas import SessionCreate
from stocktake.services.reports.report_service import (
    build_report,
    render_report,
    report_disk_name,
    report_timestamp,
)
from stocktake.services.stocktaking.count_service import record_count
from stocktake.services.stocktaking.session_service import create_session

NOW = datetime(2026, 10, 19, 8, 30, 5, 123456, tzinfo=timezone.utc)


async def _session(db, user, project, name):
    return await create_session(
        db, SessionCreate(user_id=user.id, project_id=project.id, session_name=name)
    )


def test_report_timestamp_is_filename_safe():
    assert report_timestamp(NOW) == "2026-10-19T08-30-05"


async def test_session_without_records_yields_no_rows(db, stock_taker, project, part):
    session = await _session(db, stock_taker, project, "Morning Count")

    data = await build_report(
        db, ReportRequest(session_id=session.id, format=ReportFormat.PDF), now=NOW
    )

    assert data.rows == []
    assert data.filename == "stock_report_Morning Count_2026-10-19T08-30-05.pdf"


async def test_rows_join_session_part_and_location(db, stock_taker, project, part, location):
    session = await _session(db, stock_taker, project, "Morning Count")
    await record_count(
        db, RecordCreate(session_id=session.id, part_id=part.id, qty_counted=85, remark="ok")
    )

    data = await build_report(
        db, ReportRequest(project_id=project.id, format=ReportFormat.XLS), now=NOW
    )

    [row] = data.rows
    assert row.session_name == "Morning Count"
    assert row.session_status == SessionStatus.ACTIVE
    assert row.user_username == stock_taker.username
    assert row.project_name == project.name
    assert row.part_number == "B1"
    assert row.location_code == location.location_code
    assert row.qty_std == 100
    assert row.qty_sisa == 85
    assert row.qty_counted == 85
    assert row.qty_difference == -15
    assert row.record_remark == "ok"
    assert data.filename == "stock_report_Plant_A_Annual_2026-10-19T08-30-05.xlsx"


async def test_filters_are_combined(db, stock_taker, admin, project, part):
    mine = await _session(db, stock_taker, project, "Mine")
    other = await _session(db, admin, project, "Other")
    for s in (mine, other):
        await record_count(db, RecordCreate(session_id=s.id, part_id=part.id, qty_counted=1))

    data = await build_report(
        db,
        ReportRequest(project_id=project.id, session_id=mine.id, format=ReportFormat.PDF),
        now=NOW,
    )

    assert {r.session_id for r in data.rows} == {mine.id}
    assert data.filename.startswith("stock_report_Mine_")


async def test_date_bounds_are_inclusive(db, stock_taker, project, part):
    session = await _session(db, stock_taker, project, "Dated")
    await record_count(db, RecordCreate(session_id=session.id, part_id=part.id, qty_counted=3))

    row = await db.get(StockTakingSession, session.id)
    started = datetime(2026, 10, 1, 9, 0, 0, tzinfo=timezone.utc)
    row.started_at = started
    await db.commit()

    exact = await build_report(
        db,
        ReportRequest(format=ReportFormat.PDF, date_from=started, date_to=started),
        now=NOW,
    )
    later = await build_report(
        db,
        ReportRequest(format=ReportFormat.PDF, date_from=started + timedelta(seconds=1)),
        now=NOW,
    )

    assert len(exact.rows) == 1
    assert later.rows == []
    assert exact.filename == "stock_report_all_2026-10-19T08-30-05.pdf"


async def test_unknown_ids_fall_back_in_filename(db):
    by_session = await build_report(
        db, ReportRequest(session_id=77, format=ReportFormat.PDF), now=NOW
    )
    by_project = await build_report(
        db, ReportRequest(project_id=77, format=ReportFormat.XLS), now=NOW
    )

    assert by_session.filename == "stock_report_session_2026-10-19T08-30-05.pdf"
    assert by_project.filename == "stock_report_project_2026-10-19T08-30-05.xlsx"


async def test_render_xlsx_and_pdf(db, stock_taker, project, part, tmp_path):
    session = await _session(db, stock_taker, project, "Render")
    await record_count(db, RecordCreate(session_id=session.id, part_id=part.id, qty_counted=90))

    xlsx = await build_report(db, ReportRequest(session_id=session.id, format=ReportFormat.XLS), now=NOW)
    pdf = await build_report(db, ReportRequest(session_id=session.id, format=ReportFormat.PDF), now=NOW)

    xlsx_path = render_report(xlsx, report_dir=str(tmp_path))
    pdf_path = render_report(pdf, report_dir=str(tmp_path))

    sheet = load_workbook(xlsx_path).active
    assert sheet.cell(row=1, column=1).value == "Session"
    assert sheet.cell(row=2, column=1).value == "Render"
    assert sheet.max_row == 2

    with open(pdf_path, "rb") as fh:
        assert fh.read(5) == b"%PDF-"
    assert os.path.basename(pdf_path) == pdf.filename


async def test_offset_date_bounds_are_compared_in_utc(db, stock_taker, project, part):
    session = await _session(db, stock_taker, project, "Jakarta")
    await record_count(db, RecordCreate(session_id=session.id, part_id=part.id, qty_counted=3))

    row = await db.get(StockTakingSession, session.id)
    row.started_at = datetime(2026, 10, 1, 9, 0, 0, tzinfo=timezone.utc)
    await db.commit()

    local = datetime(2026, 10, 1, 16, 0, 0, tzinfo=timezone(timedelta(hours=7)))
    data = await build_report(
        db,
        ReportRequest(format=ReportFormat.PDF, date_from=local, date_to=local),
        now=NOW,
    )

    assert len(data.rows) == 1


def test_naive_date_bounds_are_read_as_utc():
    request = ReportRequest(
        format=ReportFormat.XLS,
        date_from="2026-10-01T09:00:00",
        date_to="2026-10-01T16:00:00+07:00",
    )

    assert request.date_from == datetime(2026, 10, 1, 9, 0, 0, tzinfo=timezone.utc)
    assert request.date_to == request.date_from
    assert request.date_to.utcoffset() == timedelta(0)


async def test_session_name_with_slash_renders_inside_report_dir(
    db, stock_taker, project, part, tmp_path
):
    session = await _session(db, stock_taker, project, "Count 1/2")
    await record_count(db, RecordCreate(session_id=session.id, part_id=part.id, qty_counted=7))

    data = await build_report(
        db, ReportRequest(session_id=session.id, format=ReportFormat.PDF), now=NOW
    )
    path = render_report(data, report_dir=str(tmp_path))

    assert data.filename == "stock_report_Count 1/2_2026-10-19T08-30-05.pdf"
    assert os.path.dirname(path) == str(tmp_path)
    assert os.path.basename(path) == "stock_report_Count 1_2_2026-10-19T08-30-05.pdf"
    with open(path, "rb") as fh:
        assert fh.read(5) == b"%PDF-"


def test_disk_name_cannot_leave_report_dir():
    assert report_disk_name("stock_report_../../etc/x_2026.pdf") == "stock_report_.._.._etc_x_2026.pdf"
