"""Pytest configuration and shared fixtures.

Handlers and services run against an in-memory SQLite database (aiosqlite)
shared through a single static connection. Email delivery is mocked, and
Inngest steps are replaced by ``FakeStep`` which runs step handlers inline.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.models import Base

# 12:00 UTC, reminders look at shows between 19:50 and 20:00 UTC
NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


class FakeStep:
    """Stand-in for ``inngest.Step`` recording what the handler asked for."""

    def __init__(self):
        self.run_ids: list[str] = []
        self.sleeps: list[tuple[str, datetime]] = []

    async def run(self, step_id, handler):
        self.run_ids.append(step_id)
        return await handler()

    async def sleep_until(self, step_id, until):
        self.sleeps.append((step_id, until))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite+aiosqlite://",
        EMAIL_DEVELOPMENT_MODE=True,
        USER_PAGE_SIZE=2,
    )


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def step() -> FakeStep:
    return FakeStep()


@pytest.fixture
def email_service() -> AsyncMock:
    service = AsyncMock()
    service.send_email.return_value = "message-id"
    return service


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def seed(db):
    """Add records and commit them."""

    async def _seed(*records):
        db.add_all(records)
        await db.commit()
        return records

    return _seed
