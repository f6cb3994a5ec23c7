import pytest
from sqlalchemy import select, func, update

from stocktake.core.exceptions import AppException
from stocktake.constants.error_codes import ErrorCode
from stocktake.models.masters.part_models import Part
from stocktake.models.stocktaking.record_models import StockTakingRecord
from stocktake.schemas.stocktaking.record_schemas import RecordCreate
from stocktake.schemas.stocktaking.session_schemas import SessionCreate
from stocktake.services.stocktaking.count_service import list_session_records, record_count
from stocktake.services.stocktaking.session_service import complete_session, create_session


@pytest.fixture
async def session(db, stock_taker, project):
    return await create_session(
        db,
        SessionCreate(user_id=stock_taker.id, project_id=project.id, session_name="Morning Count"),
    )


async def _reload_part(db, part_id):
    return await db.scalar(
        select(Part).where(Part.id == part_id).execution_options(populate_existing=True)
    )


async def test_shortage_against_standard(db, session, part):
    record = await record_count(
        db, RecordCreate(session_id=session.id, part_id=part.id, qty_counted=85, remark="ok")
    )

    assert record.qty_difference == -15
    assert record.qty_counted == 85
    assert record.remark == "ok"

    reloaded = await _reload_part(db, part.id)
    assert reloaded.qty_sisa == 85
    assert reloaded.version == 2


async def test_difference_never_uses_previous_count(db, session, part):
    await record_count(db, RecordCreate(session_id=session.id, part_id=part.id, qty_counted=85))
    second = await record_count(db, RecordCreate(session_id=session.id, part_id=part.id, qty_counted=120))

    assert second.qty_difference == 20
    assert (await _reload_part(db, part.id)).qty_sisa == 120


async def test_unknown_part(db, session):
    with pytest.raises(AppException) as exc:
        await record_count(db, RecordCreate(session_id=session.id, part_id=999, qty_counted=1))

    assert exc.value.status_code == 404
    assert exc.value.error_code == ErrorCode.PART_NOT_FOUND


async def test_unknown_session(db, part):
    with pytest.raises(AppException) as exc:
        await record_count(db, RecordCreate(session_id=999, part_id=part.id, qty_counted=1))

    assert exc.value.error_code == ErrorCode.SESSION_NOT_FOUND


async def test_completed_session_rejects_counts(db, session, part):
    await complete_session(db, session.id)

    with pytest.raises(AppException) as exc:
        await record_count(db, RecordCreate(session_id=session.id, part_id=part.id, qty_counted=5))

    assert exc.value.status_code == 409
    assert exc.value.error_code == ErrorCode.SESSION_NOT_ACTIVE
    assert await db.scalar(select(func.count(StockTakingRecord.id))) == 0


async def test_stale_part_version_is_rejected(db, session, part):
    # another writer bumps the version behind this session's back
    await db.execute(
        update(Part)
        .where(Part.id == part.id)
        .values(qty_sisa=70, version=Part.version + 1)
        .execution_options(synchronize_session=False)
    )
    await db.commit()

    with pytest.raises(AppException) as exc:
        await record_count(db, RecordCreate(session_id=session.id, part_id=part.id, qty_counted=85))

    assert exc.value.status_code == 409
    assert exc.value.error_code == ErrorCode.PART_VERSION_CONFLICT
    assert await db.scalar(select(func.count(StockTakingRecord.id))) == 0
    assert (await _reload_part(db, part.id)).qty_sisa == 70


async def test_list_session_records(db, session, part):
    await record_count(db, RecordCreate(session_id=session.id, part_id=part.id, qty_counted=1))
    await record_count(db, RecordCreate(session_id=session.id, part_id=part.id, qty_counted=2))

    records = await list_session_records(db, session.id)

    assert [r.qty_counted for r in records] == [1, 2]

    with pytest.raises(AppException):
        await list_session_records(db, 999)
