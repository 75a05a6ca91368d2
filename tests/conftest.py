"""
Shared test fixtures: SQLite test database, test client, auth helpers.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Set env before importing app modules; settings are read at import time
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only"
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
for _key in ("GOOGLE_SOLAR_API_KEY", "GOOGLE_MAPS_API_KEY", "SHOVELS_API_KEY", "OPENAI_API_KEY"):
    os.environ[_key] = ""

from roofmaster.database import Base, get_db
from roofmaster.main import app


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def register(client, username="roofer", email="roofer@example.com", password="strongpassword123"):
    response = client.post("/api/auth/register", json={
        "username": username,
        "email": email,
        "password": password,
    })
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def register_user(client):
    """Factory: register a contractor and return the full response body."""
    def _register(**kwargs):
        return register(client, **kwargs)
    return _register


@pytest.fixture
def auth_headers(client):
    """Register a test user and return auth headers."""
    token = register(client)["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_headers(client):
    """A second contractor, for ownership checks."""
    token = register(client, username="rival", email="rival@example.com")["access_token"]
    return {"Authorization": f"Bearer {token}"}
