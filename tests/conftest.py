import os

# Must be set before studio_slots.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SLOT_BUFFER_MINUTES", "0")

from datetime import date, time

import pytest
from httpx import ASGITransport, AsyncClient
from sqlmodel import SQLModel

import studio_slots.models  # noqa: F401 - register tables
from studio_slots.core.db import async_session_maker, engine
from studio_slots.core.errors import StoreUnavailable
from studio_slots.services.intervals import BookedInterval, IntervalStatus
from studio_slots.services.slot_catalog import default_catalog

WEDNESDAY = date(2026, 10, 21)
THURSDAY = date(2026, 10, 22)


def hm(value: str) -> time:
    return time.fromisoformat(value)


def interval(d: date, start: str, end: str, status: IntervalStatus = IntervalStatus.CONFIRMED) -> BookedInterval:
    return BookedInterval(date=d, start=hm(start), end=hm(end), status=status)


class FakeStore:
    """In-memory booking store; counts reads and can be switched to fail."""

    def __init__(self, intervals=None, fail: bool = False):
        self.intervals = list(intervals or [])
        self.fail = fail
        self.reads = 0

    async def intervals_for_date(self, d: date) -> list[BookedInterval]:
        self.reads += 1
        if self.fail:
            raise StoreUnavailable("connection refused")
        return [i for i in self.intervals if i.date == d]


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
async def db():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield
    # StaticPool holds the only :memory: connection; disposing drops the database
    await engine.dispose()


@pytest.fixture
async def session(db):
    async with async_session_maker() as s:
        yield s


@pytest.fixture
async def client(db):
    from studio_slots.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
