import os

os.environ["APP_ENV"] = "development"
os.environ["DB_TYPE"] = "sqlite"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("JWT_ACCESS_SECRET_KEY", "test-secret-key")

from decimal import Decimal

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stocktake.core.db import Base, enable_sqlite_foreign_keys
from stocktake.core.security import hash_password
from stocktake.models.enums.user_role import UserRole
from stocktake.models.masters.part_models import Part
from stocktake.models.masters.project_models import Project
from stocktake.models.masters.storage_location_models import StorageLocation
from stocktake.models.users.user_models import User


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


# =========================
# DATA FIXTURES
# =========================
@pytest.fixture
async def admin(db):
    user = User(
        username="admin",
        email="admin@example.com",
        password_hash=hash_password("admin123"),
        role=UserRole.ADMIN,
    )
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def stock_taker(db):
    user = User(
        username="counter",
        email="counter@example.com",
        password_hash=hash_password("counter123"),
        role=UserRole.STOCK_TAKER,
    )
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def project(db):
    project = Project(name="Plant A Annual", description="Yearly count")
    db.add(project)
    await db.commit()
    return project


@pytest.fixture
async def location(db):
    location = StorageLocation(
        location_code="WH-A-01",
        location_name="Warehouse A, rack 1",
        qr_code="QR-WH-A-01",
    )
    db.add(location)
    await db.commit()
    return location


@pytest.fixture
async def part(db, project, location):
    part = Part(
        no="P1",
        part="Bolt",
        std_pack=Decimal("10"),
        project_id=project.id,
        part_name="Hex Bolt M8",
        part_number="B1",
        storage_location_id=location.id,
        qty_std=100,
        qty_sisa=90,
    )
    db.add(part)
    await db.commit()
    return part

