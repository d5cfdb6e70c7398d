"""
Pytest configuration and fixtures for the Smart Task Manager tests.
"""

import os

# Settings are read once at import time, so configure them before importing the app
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["JWT_SECRET"] = "test-secret-key-for-the-suite-0123456789"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlmodel import SQLModel

from app.main import app
from app.database import engine_options, get_session


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a fresh in-memory database engine."""
    engine = create_async_engine(TEST_DATABASE_URL, **engine_options(TEST_DATABASE_URL))

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session(test_engine):
    """Create a test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(test_engine):
    """Create an async test client with test database."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_session():
        async with async_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def register(client):
    """
    Factory that registers a user and returns (user, auth headers).

    Usage:
        user, headers = await register("alice@example.com")
    """

    async def _register(email: str, name: str = "Test User", password: str = "password123"):
        response = await client.post(
            "/users/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], {"Authorization": f"Bearer {body['token']}"}

    return _register


@pytest_asyncio.fixture
async def owner(register):
    """A registered user that owns the resources created in a test."""
    return await register("owner@example.com", name="Owner")


@pytest_asyncio.fixture
async def project(client, owner):
    """A project owned by ``owner``."""
    _, headers = owner
    response = await client.post(
        "/projects",
        json={"name": "Test Project", "description": "Test project description"},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["project"]
