"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seeded companies, jobs, users and applications
- Auth tokens
"""

import os

# Settings are read at import time; keep bcrypt cheap and logs readable.
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("JSON_LOGS", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.core.database import Base, get_db
from jobly.core.security import create_access_token
from jobly.crud import company as company_crud
from jobly.crud import job as job_crud
from jobly.crud import user as user_crud
from jobly import models  # noqa: F401
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def job_ids(db_session):
    """
    Seed the database and return the ids of jobs j1, j2, j3.

    Companies c1-c3 have 1-3 employees. Jobs:
    - j1: salary 100000, equity 0, at c1
    - j2: salary 50000, equity 1, at c2
    - j3: salary 20000, equity 0.2, at c3

    Users u1, u2 (password "password1") and admin; u2 applied to j1 and j2.
    """
    for n in (1, 2, 3):
        company_crud.create(db_session, {
            "handle": f"c{n}",
            "name": f"C{n}",
            "numEmployees": n,
            "description": f"Desc{n}",
            "logoUrl": f"http://c{n}.img",
        })

    ids = [
        job_crud.create(db_session, {"title": "j1", "salary": 100000, "equity": 0, "companyHandle": "c1"})["id"],
        job_crud.create(db_session, {"title": "j2", "salary": 50000, "equity": 1, "companyHandle": "c2"})["id"],
        job_crud.create(db_session, {"title": "j3", "salary": 20000, "equity": 0.2, "companyHandle": "c3"})["id"],
    ]

    for username, is_admin in (("u1", False), ("u2", False), ("admin", True)):
        user_crud.register(db_session, {
            "username": username,
            "password": "password1",
            "firstName": f"{username}F",
            "lastName": f"{username}L",
            "email": f"{username}@user.com",
            "isAdmin": is_admin,
        })

    user_crud.apply(db_session, "u2", ids[0])
    user_crud.apply(db_session, "u2", ids[1])

    return ids


@pytest.fixture
def u1_auth():
    """Authorization header for non-admin user u1."""
    return {"Authorization": f"Bearer {create_access_token('u1', is_admin=False)}"}


@pytest.fixture
def admin_auth():
    """Authorization header for the admin user."""
    return {"Authorization": f"Bearer {create_access_token('admin', is_admin=True)}"}
