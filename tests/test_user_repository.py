from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import WriteError, OperationFailure, ServerSelectionTimeoutError

from mflix.core.exceptions import DuplicateKeyError, IncorrectOperationError, InvalidArgumentError
from mflix.db.mongo import MflixContext
from mflix.models.user import User
from mflix.repositories.user_repository import UserRepository


def make_user(email="alice@x.com"):
    return User(email=email, name="Alice", password="hashed-secret")


async def test_add_user_then_get_user(users):
    assert await users.add_user(make_user()) is True

    stored = await users.get_user("alice@x.com")
    assert stored.email == "alice@x.com"
    assert stored.name == "Alice"
    assert stored.preferences == {}


async def test_add_user_twice_raises_duplicate_key(users, database):
    assert await users.add_user(make_user()) is True

    with pytest.raises(DuplicateKeyError) as exc_info:
        await users.add_user(make_user())

    assert isinstance(exc_info.value, IncorrectOperationError)
    assert exc_info.value.status_code == 409
    assert await database["users"].count_documents({"email": "alice@x.com"}) == 1


async def test_add_user_store_failure_returns_false(users):
    users.durable_collection = AsyncMock()
    users.durable_collection.insert_one.side_effect = WriteError("write failed")

    assert await users.add_user(make_user()) is False


async def test_get_user_absent_returns_none(users):
    assert await users.get_user("nobody@x.com") is None


async def test_update_user_preferences_coerces_values_to_strings(users):
    await users.add_user(make_user())

    assert await users.update_user_preferences(
        "alice@x.com", {"favorite_cast": "Meg Ryan", "preferred_language": "English", "year": 1993}
    ) is True

    stored = await users.get_user("alice@x.com")
    assert stored.preferences == {
        "favorite_cast": "Meg Ryan",
        "preferred_language": "English",
        "year": "1993",
    }


async def test_update_user_preferences_replaces_whole_map(users):
    await users.add_user(make_user())
    await users.update_user_preferences("alice@x.com", {"favorite_cast": "Meg Ryan"})

    await users.update_user_preferences("alice@x.com", {"preferred_language": "French"})

    stored = await users.get_user("alice@x.com")
    assert stored.preferences == {"preferred_language": "French"}


@pytest.mark.parametrize("preferences", [None, {}])
async def test_update_user_preferences_rejects_empty_map(users, database, preferences):
    with pytest.raises(InvalidArgumentError):
        await users.update_user_preferences("ghost@x.com", preferences)

    # no upserted document
    assert await database["users"].find_one({"email": "ghost@x.com"}) is None


async def test_update_user_preferences_store_failure_returns_false(users):
    users.collection = AsyncMock()
    users.collection.update_one.side_effect = OperationFailure("not primary")

    assert await users.update_user_preferences("alice@x.com", {"a": "b"}) is False


async def test_delete_user_cascades_to_sessions(users, sessions, database):
    await users.add_user(make_user())
    await sessions.create_user_session("alice@x.com", "token-1")

    assert await users.delete_user("alice@x.com") is True

    assert await users.get_user("alice@x.com") is None
    assert await sessions.get_user_session("alice@x.com") is None
    assert await database["sessions"].count_documents({"user_id": "alice@x.com"}) == 0


async def test_delete_user_twice_returns_false(users):
    await users.add_user(make_user())

    assert await users.delete_user("alice@x.com") is True
    assert await users.delete_user("alice@x.com") is False


async def test_delete_user_keeps_other_users_sessions(users, sessions):
    await users.add_user(make_user())
    await users.add_user(make_user("bob@x.com"))
    await sessions.create_user_session("alice@x.com", "token-a")
    await sessions.create_user_session("bob@x.com", "token-b")

    await users.delete_user("alice@x.com")

    bob_session = await sessions.get_user_session("bob@x.com")
    assert bob_session.jwt == "token-b"


async def test_delete_user_session_cascade_is_best_effort(users):
    await users.add_user(make_user())
    users.sessions = AsyncMock()
    users.sessions.delete_many.side_effect = OperationFailure("sessions unavailable")

    assert await users.delete_user("alice@x.com") is True


async def test_delete_user_store_failure_returns_false(users):
    users.collection = AsyncMock()
    users.collection.delete_one.side_effect = OperationFailure("not primary")

    assert await users.delete_user("alice@x.com") is False


async def test_add_user_lookup_failure_returns_false(users):
    users.collection = AsyncMock()
    users.collection.find_one.side_effect = ServerSelectionTimeoutError("no primary")

    assert await users.add_user(make_user()) is False


async def test_get_user_store_failure_returns_none(users):
    users.collection = AsyncMock()
    users.collection.find_one.side_effect = OperationFailure("read failed")

    assert await users.get_user("alice@x.com") is None


def test_registration_waits_for_majority(settings):
    database = MagicMock()

    UserRepository(MflixContext(database=database, settings=settings))

    args, kwargs = database.get_collection.call_args
    assert args == ("users",)
    assert kwargs["write_concern"].document == {"w": "majority", "wtimeout": 2500}
