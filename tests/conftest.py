"""
Test configuration and fixtures.
"""
import os
import pytest
from typing import Generator
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Set test settings before importing app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-suite-signing-key-0123456789abcdef"

from clubledger.main import app
from clubledger.db.base import Base
from clubledger.db.session import get_db
from clubledger.models.user import User
from clubledger.core.security import hash_password
import clubledger.models  # noqa: F401


# One shared in-memory connection so every session sees the same tables
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh schema and a database session for the test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database session override."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


def _make_user(db: Session, email: str) -> User:
    user = User(
        email=email,
        hashed_password=hash_password("testpassword123"),
        full_name="Test Member",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _login(client: TestClient, email: str) -> dict:
    response = client.post(
        "/api/auth/login",
        json={"email": email, "password": "testpassword123"}
    )
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def test_user(db: Session) -> User:
    return _make_user(db, "testuser@example.com")


@pytest.fixture
def other_user(db: Session) -> User:
    return _make_user(db, "otheruser@example.com")


@pytest.fixture
def auth_headers(client: TestClient, test_user: User) -> dict:
    """Get auth headers for test user."""
    return _login(client, test_user.email)


@pytest.fixture
def other_auth_headers(client: TestClient, other_user: User) -> dict:
    """Auth headers for a second user, to check per-user scoping."""
    return _login(client, other_user.email)


@pytest.fixture
def make_ingredient(client: TestClient, auth_headers: dict):
    """Factory creating a catalog ingredient through the API."""
    def _create(name: str, unit_cost: str, unit_of_measure: str = "kg") -> dict:
        response = client.post(
            "/api/ingredients",
            json={"name": name, "unit_of_measure": unit_of_measure, "unit_cost": unit_cost},
            headers=auth_headers,
        )
        assert response.status_code == 201
        return response.json()
    return _create
