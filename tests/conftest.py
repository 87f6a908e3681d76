# Set environment variable to indicate we're running tests
import os

os.environ["TESTING"] = "True"
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("IDENTITY_SHARED_SECRET", "test-identity-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from leettrack.auth.model import User
from leettrack.auth.util import create_access_token
from leettrack.config import logger
from leettrack.db.main import get_session
from leettrack.main import app

# Use an in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session
TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


# Create test database and tables
@pytest.fixture(scope="function")
def test_db():
    SQLModel.metadata.create_all(bind=engine)

    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()

        # Drop tables after test
        SQLModel.metadata.drop_all(bind=engine)


# Create test client
@pytest.fixture
def client(test_db):
    # Every request shares the test session
    app.dependency_overrides[get_session] = lambda: test_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def make_user(db, email, name=None):
    user = User(email=email, name=name)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def login(client, user):
    token = create_access_token({"id": str(user.id), "email": user.email})
    client.cookies.set("access_token", token)


@pytest.fixture
def test_user(test_db):
    return make_user(test_db, "coder@example.com", "Coder")


@pytest.fixture
def other_user(test_db):
    return make_user(test_db, "rival@example.com", "Rival")


# Client carrying a session cookie for test_user
@pytest.fixture
def auth_client(client, test_user):
    login(client, test_user)
    return client


@pytest.fixture
def two_sum():
    return {
        "name": "Two Sum",
        "difficulty": "Easy",
        "code": "def f(): pass",
        "topics": ["Array", "Hash Table"],
        "languages": ["Python"],
    }


# Disable logging during tests
@pytest.fixture(autouse=True)
def disable_logging():
    logger.disabled = True
    yield
    logger.disabled = False
