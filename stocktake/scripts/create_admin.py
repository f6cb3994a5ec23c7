"""Bootstrap the first ADMIN account: ``python -m stocktake.scripts.create_admin``."""

import asyncio
import os

from stocktake.core.db import AsyncSessionLocal
from stocktake.core.exceptions import AppException
from stocktake.models.enums.user_role import UserRole
from stocktake.schemas.users.user_schemas import UserCreateSchema
from stocktake.services.users.user_services import create_user
from stocktake.utils.logger import get_logger

logger = get_logger(__name__)


async def create_admin():
    payload = UserCreateSchema(
        username=os.getenv("ADMIN_USERNAME", "admin"),
        email=os.getenv("ADMIN_EMAIL", "admin@example.com"),
        password=os.getenv("ADMIN_PASSWORD", "admin123"),
        role=UserRole.ADMIN,
    )
    async with AsyncSessionLocal() as session:
        try:
            admin = await create_user(session, payload)
        except AppException as e:
            logger.warning("Admin not created", extra={"reason": e.detail})
            return
    logger.info("Admin user created", extra={"user_id": admin.id})


if __name__ == "__main__":
    from stocktake.core.logging import setup_logging

    setup_logging()
    asyncio.run(create_admin())
