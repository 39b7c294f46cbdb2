"""Shared pytest fixtures. Everything runs against SQLite in-memory."""

import logging

import pytest
from fastapi.testclient import TestClient

from helpers import TEST_DB_URL, make_settings
from notekeep.database import Database
from notekeep.main import create_app
from notekeep.security.jwt import TokenService
from notekeep.security.password import PasswordHasher
from notekeep.security.password_policy import PasswordPolicy

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@pytest.fixture
def test_settings():
    return make_settings()


@pytest.fixture
def token_service(test_settings):
    return TokenService.from_settings(test_settings)


@pytest.fixture(scope="session")
def hasher():
    # lowest allowed cost keeps the suite fast
    return PasswordHasher(rounds=10)


@pytest.fixture
def password_policy(hasher):
    return PasswordPolicy(hasher=hasher)


@pytest.fixture
async def database():
    db = Database(TEST_DB_URL)
    await db.create_tables()
    try:
        yield db
    finally:
        await db.dispose()


@pytest.fixture
async def db_session(database):
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def client(test_settings):
    """TestClient over a fresh app; the lifespan creates the tables."""
    app = create_app(test_settings)
    with TestClient(app) as c:
        yield c
