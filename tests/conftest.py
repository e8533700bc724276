"""Shared fixtures and utilities for tests."""

import os
import tempfile
from datetime import timedelta
from pathlib import Path

# Settings are read at import time, so the environment is set up before any
# application module is imported.
_TEST_DB_DIR = tempfile.mkdtemp(prefix="hireline-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_TEST_DB_DIR) / 'test.db'}"
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key-min-32-chars-long-for-security")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("ACCESS_TOKEN_EXPIRE_MINUTES", "60")
os.environ["APP_ENV"] = "test"
os.environ["JSON_LOGS"] = "false"

import httpx
import pytest
import pytest_asyncio

from core.security import create_access_token, hash_password
from database.engine import AsyncSessionLocal, close_db, drop_db, init_db
from database.models.jobs import Job
from database.models.users import User
from tests.factories import BASE_TIME, make_application, make_candidate


@pytest_asyncio.fixture
async def db():
    """Fresh schema and a session for one test."""
    await drop_db()
    await init_db()
    async with AsyncSessionLocal() as session:
        yield session
    await close_db()


@pytest_asyncio.fixture
async def client(db):
    """HTTP client bound to the app, sharing the test's event loop."""
    from api.main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
        yield http


@pytest_asyncio.fixture
async def user(db):
    user = User(
        email="recruiter@example.com",
        password_hash=hash_password("CorrectHorse9"),
        first_name="Rita",
        last_name="Recruiter",
        profile_image_url="https://img.example.com/rita.png",
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest.fixture
def auth_headers(user):
    token = create_access_token(user_id=user.id, email=user.email, role=user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def job(db, user):
    job = Job(
        title="Backend Engineer",
        description="Build the hiring platform",
        department="Engineering",
        location="Remote",
        type="full-time",
        posted_by=user.id,
    )
    db.add(job)
    await db.commit()
    await db.refresh(job)
    return job


@pytest_asyncio.fixture
async def candidate(db):
    return await make_candidate(db, "Ada", "Lovelace", "ada@example.com")


@pytest_asyncio.fixture
async def pipeline_applications(db, job):
    """A1(applied, oldest), A2(interview), A3(applied, newest)."""
    ada = await make_candidate(db, "Ada", "Lovelace", "ada@example.com")
    alan = await make_candidate(db, "Alan", "Turing", "alan@example.com")
    grace = await make_candidate(db, "Grace", "Hopper", "grace@example.com")

    a1 = await make_application(db, ada, job, "applied", BASE_TIME)
    a2 = await make_application(db, alan, job, "interview", BASE_TIME + timedelta(days=1))
    a3 = await make_application(db, grace, job, "applied", BASE_TIME + timedelta(days=2))
    return a1, a2, a3
