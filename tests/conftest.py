"""
Test configuration and fixtures for the Note App API.

This module provides the necessary fixtures and configuration for running tests
with proper database isolation and environment setup.
"""

import os
import tempfile
import uuid
from typing import Generator

from dotenv import load_dotenv

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

load_dotenv()

test_db_url = os.getenv("TEST_DATABASE_URL")
if test_db_url:
    if "postgresql://" in test_db_url and "asyncpg" not in test_db_url:
        test_db_url = test_db_url.replace("postgresql://", "postgresql+asyncpg://")
    os.environ["DATABASE_URL"] = test_db_url
else:
    test_db_path = os.path.join(tempfile.mkdtemp(), "noteapp_test.db")
    os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{test_db_path}"

from noteapp.features.auth.services.email_service import get_mailer  # noqa: E402
from noteapp.platform.db.base import Base  # noqa: E402


class FakeMailer:
    """Records every passcode instead of emailing it."""

    def __init__(self):
        self.sent = []
        self.fail = False

    def send(self, email: str, code: str) -> bool:
        self.sent.append((email, code))
        return not self.fail

    def last_code(self, email: str) -> str:
        for sent_email, code in reversed(self.sent):
            if sent_email == email:
                return code
        raise AssertionError(f"No OTP was mailed to {email}")


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from noteapp.main import app

    return app


@pytest.fixture
def fake_mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture(scope="function")
def client(test_app, fake_mailer) -> Generator[TestClient, None, None]:
    """
    Test client with the mailer dependency replaced by a recording fake.
    Entering the client runs the app lifespan, which creates the tables.
    """
    test_app.dependency_overrides[get_mailer] = lambda: fake_mailer
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.pop(get_mailer, None)


@pytest.fixture
def unique_email() -> str:
    return f"user{uuid.uuid4().hex[:10]}@example.com"


@pytest.fixture
def signup(client, fake_mailer):
    """Factory that runs the whole signup flow and returns (email, token)."""

    def _signup(email: str = None, name: str = "Test User", dob: str = "1995-04-12"):
        email = email or f"user{uuid.uuid4().hex[:10]}@example.com"
        response = client.post("/send-otp", json={"email": email})
        assert response.status_code == 200, response.json()

        response = client.post(
            "/verify-otp",
            json={"name": name, "dob": dob, "email": email, "otp": fake_mailer.last_code(email)},
        )
        assert response.status_code == 201, response.json()
        return email, response.json()["token"]

    return _signup


@pytest_asyncio.fixture
async def db_session():
    """An isolated in-memory database for service-level tests."""
    import noteapp.main  # noqa: F401  registers every model on Base.metadata

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    async with session_maker() as session:
        yield session

    await engine.dispose()
