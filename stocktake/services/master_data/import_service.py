# stocktake/services/master_data/import_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from stocktake.models.masters.part_models import Part
from stocktake.models.masters.project_models import Project
from stocktake.models.masters.storage_location_models import StorageLocation
from stocktake.models.users.user_models import User
from stocktake.schemas.master_data.import_schemas import (
    ImportSummary,
    PartImportRow,
    RowError,
)
from stocktake.services.master_data.payload_decoder import (
    MalformedPayloadError,
    decode_rows,
)
from stocktake.services.master_data.row_validator import (
    build_location_lookup,
    display_row_number,
    validate_row,
)
from stocktake.constants.activity_codes import ActivityCode
from stocktake.utils.activity_helpers import emit_activity
from stocktake.utils.logger import get_logger

logger = get_logger(__name__)


def _failed(message: str) -> ImportSummary:
    return ImportSummary(success=False, imported_count=0, errors=[message])


async def load_location_lookup(db: AsyncSession) -> dict[str, int]:
    result = await db.execute(
        select(StorageLocation.location_code, StorageLocation.id)
    )
    return build_location_lookup(result.all())


async def _insert_part(
    db: AsyncSession,
    project_id: int,
    row: PartImportRow,
) -> None:
    db.add(Part(project_id=project_id, **row.model_dump()))
    await db.commit()


# =====================================================
# IMPORT MASTER DATA
# =====================================================
async def import_master_data(
    db: AsyncSession,
    project_id: int,
    file_data: str,
    user: User | None = None,
) -> ImportSummary:
    """Load part rows into ``project_id``.

    Every accepted row is committed on its own, so a rejected or failing row
    never undoes the rows before it and an interrupted import leaves the rows
    committed so far in place. Row problems are collected into the summary;
    nothing row-related is raised.
    """
    logger.info("Import master data", extra={"project_id": project_id})

    project = await db.get(Project, project_id)
    if not project:
        return _failed(f"Project with ID {project_id} not found")
    project_name = project.name

    try:
        rows = decode_rows(file_data)
    except MalformedPayloadError as e:
        logger.warning("Undecodable master data payload", extra={"reason": str(e)})
        return _failed("Invalid file format")

    if not rows:
        return _failed("No data rows found")

    location_lookup = await load_location_lookup(db)

    errors: list[str] = []
    imported_count = 0
    rolled_back = False

    for index, raw in enumerate(rows):
        verdict = validate_row(raw, index, location_lookup)

        if isinstance(verdict, RowError):
            errors.append(str(verdict))
            continue

        try:
            await _insert_part(db, project_id, verdict)
        except IntegrityError:
            await db.rollback()
            rolled_back = True
            errors.append(f"Row {display_row_number(index)}: Database constraint violation")
            continue
        except SQLAlchemyError as e:
            await db.rollback()
            rolled_back = True
            logger.exception("Part insert failed", extra={"row": display_row_number(index)})
            errors.append(f"Row {display_row_number(index)}: {e.__class__.__name__}")
            continue

        imported_count += 1

    summary = ImportSummary(
        success=not errors or imported_count > 0,
        imported_count=imported_count,
        errors=errors,
    )

    if user is not None and rolled_back:
        # rollback expired the acting user loaded on this session
        await db.refresh(user)

    await emit_activity(
        db=db,
        actor=user,
        code=ActivityCode.IMPORT_MASTER_DATA,
        target_name=project_name,
        imported_count=imported_count,
        error_count=len(errors),
    )
    await db.commit()

    logger.info(
        "Master data imported",
        extra={
            "project_id": project_id,
            "imported_count": imported_count,
            "error_count": len(errors),
        },
    )
    return summary
