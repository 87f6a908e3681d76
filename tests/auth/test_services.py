import pytest

from leettrack.auth.model import User
from leettrack.auth.service import UserService


@pytest.mark.asyncio
async def test_sign_in_creates_user(test_db):
    user = await UserService.sign_in("first@example.com", "First", test_db)

    assert user.id is not None
    assert user.email == "first@example.com"
    assert test_db.query(User).count() == 1


@pytest.mark.asyncio
async def test_sign_in_is_idempotent(test_db):
    first = await UserService.sign_in("again@example.com", None, test_db)
    second = await UserService.sign_in("again@example.com", None, test_db)

    assert first.id == second.id
    assert test_db.query(User).count() == 1


@pytest.mark.asyncio
async def test_sign_in_keeps_name_when_none_given(test_db):
    await UserService.sign_in("named@example.com", "Named", test_db)
    user = await UserService.sign_in("named@example.com", None, test_db)

    assert user.name == "Named"


@pytest.mark.asyncio
async def test_get_user_by_email(test_db, test_user):
    found = await UserService.get_user_by_email(test_user.email, test_db)
    missing = await UserService.get_user_by_email("nobody@example.com", test_db)

    assert found is not None
    assert found.id == test_user.id
    assert missing is None
