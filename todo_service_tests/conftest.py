"""
Pytest configuration for Todo Service tests.

Points the service at a throwaway SQLite file and a test signing secret
before any application module is imported.
"""
import os
import tempfile
import uuid

import pytest

TEST_JWT_SECRET = "test-signing-secret-0123456789abcdef"

_tmp_dir = tempfile.mkdtemp(prefix="todo_service_tests_")
os.environ["JWT_SECRET"] = TEST_JWT_SECRET
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmp_dir, 'test.db')}"
os.environ.pop("LOG_DIR", None)

from fastapi.testclient import TestClient  # noqa: E402

from todo_service.main import app  # noqa: E402
from todo_service.db import Base, engine  # noqa: E402


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them before each test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture
def register_and_login(client):
    """Register a fresh user and return (email, Authorization header)."""
    def _register_and_login(email=None, password="password123"):
        email = email or f"user_{uuid.uuid4().hex[:8]}@example.com"
        reg = client.post("/register", json={"email": email, "password": password})
        assert reg.status_code == 200
        login = client.post("/login", json={"email": email, "password": password})
        assert login.status_code == 200
        return email, {"Authorization": f"Bearer {login.json()['token']}"}
    return _register_and_login
