# stocktake/services/reports/report_service.py

import os
import re
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from stocktake.core.config import REPORT_DIR
from stocktake.models.masters.part_models import Part
from stocktake.models.masters.project_models import Project
from stocktake.models.masters.storage_location_models import StorageLocation
from stocktake.models.stocktaking.record_models import StockTakingRecord
from stocktake.models.stocktaking.session_models import StockTakingSession
from stocktake.models.users.user_models import User
from stocktake.schemas.reports.report_schemas import (
    ReportData,
    ReportFormat,
    ReportRequest,
    ReportRow,
)
from stocktake.utils.report_generators.stock_report_pdf import generate_stock_report_pdf
from stocktake.utils.report_generators.stock_report_xlsx import generate_stock_report_xlsx
from stocktake.utils.logger import get_logger

logger = get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")
_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.\- ]")


def report_timestamp(now: datetime) -> str:
    """UTC ISO timestamp to the second, filename-safe (``2026-10-19T08-30-05``)."""
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H-%M-%S")


def report_extension(fmt: ReportFormat) -> str:
    return ".pdf" if fmt == ReportFormat.PDF else ".xlsx"


async def _report_label(db: AsyncSession, request: ReportRequest) -> str:
    if request.session_id is not None:
        name = await db.scalar(
            select(StockTakingSession.session_name)
            .where(StockTakingSession.id == request.session_id)
        )
        return name or "session"

    if request.project_id is not None:
        name = await db.scalar(
            select(Project.name).where(Project.id == request.project_id)
        )
        return _WHITESPACE.sub("_", name) if name else "project"

    return "all"


def _report_query(request: ReportRequest):
    stmt = (
        select(
            StockTakingSession.id.label("session_id"),
            StockTakingSession.session_name,
            StockTakingSession.status.label("session_status"),
            StockTakingSession.started_at.label("session_started_at"),
            StockTakingSession.completed_at.label("session_completed_at"),
            User.username.label("user_username"),
            Project.name.label("project_name"),
            Part.no.label("part_no"),
            Part.part_name,
            Part.part_number,
            StorageLocation.location_code,
            StorageLocation.location_name,
            Part.qty_std,
            Part.qty_sisa,
            StockTakingRecord.qty_counted,
            StockTakingRecord.qty_difference,
            StockTakingRecord.remark.label("record_remark"),
            StockTakingRecord.recorded_at,
            Part.std_pack,
        )
        .join(User, User.id == StockTakingSession.user_id)
        .join(Project, Project.id == StockTakingSession.project_id)
        .join(StockTakingRecord, StockTakingRecord.session_id == StockTakingSession.id)
        .join(Part, Part.id == StockTakingRecord.part_id)
        .join(StorageLocation, StorageLocation.id == Part.storage_location_id)
    )

    if request.project_id is not None:
        stmt = stmt.where(StockTakingSession.project_id == request.project_id)
    if request.session_id is not None:
        stmt = stmt.where(StockTakingSession.id == request.session_id)
    if request.date_from is not None:
        stmt = stmt.where(StockTakingSession.started_at >= request.date_from)
    if request.date_to is not None:
        stmt = stmt.where(StockTakingSession.started_at <= request.date_to)

    return stmt.order_by(
        StockTakingSession.started_at,
        StockTakingSession.id,
        StockTakingRecord.recorded_at,
        StockTakingRecord.id,
    )


# =====================================================
# BUILD
# =====================================================
async def build_report(
    db: AsyncSession,
    request: ReportRequest,
    now: datetime | None = None,
) -> ReportData:
    """Collect the flattened report rows and the download filename.

    Every supplied filter narrows the result; sessions without records
    contribute no rows.
    """
    result = await db.execute(_report_query(request))
    rows = [ReportRow.model_validate(dict(r)) for r in result.mappings().all()]

    label = await _report_label(db, request)
    ts = report_timestamp(now or datetime.now(timezone.utc))
    filename = f"stock_report_{label}_{ts}{report_extension(request.format)}"

    logger.info(
        "Report built",
        extra={"report_file": filename, "rows": len(rows)},
    )
    return ReportData(filename=filename, format=request.format, rows=rows)


# =====================================================
# RENDER
# =====================================================
def report_disk_name(filename: str) -> str:
    """On-disk name for a report; session names are free text and may hold path separators."""
    return os.path.basename(_UNSAFE_FILENAME_CHARS.sub("_", filename))


def render_report(data: ReportData, report_dir: str = REPORT_DIR) -> str:
    """Write the report under ``report_dir`` and return its path.

    The download keeps ``data.filename`` verbatim; only the stored file is renamed.
    """
    os.makedirs(report_dir, exist_ok=True)
    file_path = os.path.join(report_dir, report_disk_name(data.filename))

    if data.format == ReportFormat.PDF:
        return generate_stock_report_pdf(data, file_path)
    return generate_stock_report_xlsx(data, file_path)
