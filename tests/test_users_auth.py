import pytest
from fastapi import HTTPException

from stocktake.core.exceptions import AppException
from stocktake.core.security import decode_access_token
from stocktake.constants.error_codes import ErrorCode
from stocktake.models.enums.user_role import UserRole
from stocktake.schemas.users.user_schemas import UserCreateSchema
from stocktake.services.auth.auth_service import login_user
from stocktake.services.users.user_services import create_user


def _new_user(**overrides):
    data = dict(username="jane", email="Jane@Example.com", password="secret1", role=UserRole.STOCK_TAKER)
    data.update(overrides)
    return UserCreateSchema(**data)


async def test_create_user_normalizes_email(db, admin):
    user = await create_user(db, _new_user(), admin)

    assert user.email == "jane@example.com"
    assert user.role == UserRole.STOCK_TAKER


async def test_duplicate_email_and_username(db, admin):
    await create_user(db, _new_user(), admin)

    with pytest.raises(AppException) as exc:
        await create_user(db, _new_user(username="other"), admin)
    assert exc.value.status_code == 409
    assert exc.value.error_code == ErrorCode.USER_EMAIL_EXISTS

    with pytest.raises(AppException) as exc:
        await create_user(db, _new_user(email="other@example.com"), admin)
    assert exc.value.error_code == ErrorCode.USER_USERNAME_EXISTS


async def test_login_issues_access_token(db, stock_taker):
    data = await login_user(db, "counter@example.com", "counter123")

    payload = decode_access_token(data.access_token)
    assert payload["sub"] == "counter@example.com"
    assert payload["role"] == "STOCK_TAKER"
    assert data.user.id == stock_taker.id
    assert stock_taker.last_login is not None


async def test_login_rejects_bad_password(db, stock_taker):
    with pytest.raises(HTTPException) as exc:
        await login_user(db, "counter@example.com", "wrong")
    assert exc.value.status_code == 401


async def test_login_rejects_inactive_user(db, stock_taker):
    stock_taker.is_active = False
    await db.commit()

    with pytest.raises(HTTPException) as exc:
        await login_user(db, "counter@example.com", "counter123")
    assert exc.value.status_code == 403
