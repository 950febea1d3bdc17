"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from maze_service.main import app
from maze_service.api.deps import limiter
from maze_service.api.routes import maze as maze_routes
from maze_service.db.database import Base, get_db
from maze_service.models.maze import MazeRecord

# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_DELETE_PASSWORD = "letmein"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    # One shared connection, otherwise every checkout sees a fresh empty database
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(test_session) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def no_rate_limit():
    """Disable rate limiting unless a test turns it back on."""
    limiter.enabled = False
    limiter.reset()
    yield
    limiter.enabled = True
    limiter.reset()


@pytest.fixture
def delete_password(monkeypatch) -> str:
    """Configure the password required by the delete route."""
    monkeypatch.setattr(maze_routes.settings, "delete_password", TEST_DELETE_PASSWORD)
    return TEST_DELETE_PASSWORD


@pytest.fixture
def sample_maze_data() -> dict:
    """Sample maze document as a generator would return it."""
    return {
        "id": "3:3:Sample",
        "height": 3,
        "width": 3,
        "seed": "Sample",
        "challenge": 2,
        "cells": [[6, 12, 10], [3, 2, 3], [5, 13, 9]],
        "start": {"row": 0, "col": 0},
        "finish": {"row": 2, "col": 2},
        "textRender": "XSXXXXX\nX.....X\nX.X.X.X\nX.X.X.X\nX.X.X.X\nX.....X\nXXXXXEX",
        "note": "Sample maze",
    }


@pytest_asyncio.fixture
async def stored_maze(test_session, sample_maze_data) -> MazeRecord:
    """Store the sample maze."""
    record = MazeRecord(
        id=sample_maze_data["id"],
        height=sample_maze_data["height"],
        width=sample_maze_data["width"],
        seed=sample_maze_data["seed"],
        challenge=sample_maze_data["challenge"],
        body=sample_maze_data,
    )
    test_session.add(record)
    await test_session.commit()
    return record
