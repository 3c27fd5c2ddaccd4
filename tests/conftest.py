import pytest
from mongomock_motor import AsyncMongoMockClient

from mflix.core.config import Settings
from mflix.db.mongo import MflixContext
from mflix.repositories.comment_repository import CommentRepository
from mflix.repositories.session_repository import SessionRepository
from mflix.repositories.user_repository import UserRepository


@pytest.fixture
def settings():
    return Settings(ENVIRONMENT="development", CRITICS_LIMIT=20, WRITE_CONCERN_TIMEOUT_MS=2500)


@pytest.fixture
def database():
    client = AsyncMongoMockClient()
    return client["mflix_test"]


@pytest.fixture
def context(database, settings):
    return MflixContext(database=database, settings=settings)


@pytest.fixture
def users(context):
    return UserRepository(context)


@pytest.fixture
def sessions(context):
    return SessionRepository(context)


@pytest.fixture
def comments(context, users):
    return CommentRepository(context, users=users)
