"""Pytest configuration and shared fixtures: log factories and an ASGI client."""

import os
import time
from datetime import date, datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Settings are read at import time; pin them before app imports
os.environ.setdefault("LOCAL_TIMEZONE", "UTC")
os.environ.setdefault("RATE_LIMIT_DEFAULT", "1000/minute")

from habittrack.main import app
from habittrack.schemas.hydration import HydrationLogEntry, HydrationSettings
from habittrack.schemas.sleep import SleepLogEntry, SleepSettings

# Sunday
AS_OF = date(2026, 10, 18)


@pytest.fixture
def sleep_log():
    """Factory for sleep entries; defaults are a 23:00-07:00 night with 15 min latency, feel 8."""
    counter = iter(range(1, 10_000))

    def _make(day: date, **overrides) -> SleepLogEntry:
        data = {
            "id": f"sleep-{next(counter)}",
            "date": day,
            "lights_out": "23:00",
            "wake_up": "06:45",
            "out_of_bed": "07:00",
            "latency": 15,
            "awakenings": 0,
            "awake_duration": 0,
            "subjective_quality": 8,
        }
        data.update(overrides)
        return SleepLogEntry(**data)

    return _make


@pytest.fixture
def drink():
    """Factory for hydration entries `offset` days before AS_OF at `hour`; completed unless active=True."""
    counter = iter(range(1, 10_000))

    def _make(offset: int, amount: int, hour: int = 9, minute: int = 0, active: bool = False) -> HydrationLogEntry:
        logged_at = datetime.combine(AS_OF - timedelta(days=offset), datetime.min.time()).replace(
            hour=hour, minute=minute
        )
        return HydrationLogEntry(
            id=f"drink-{next(counter)}",
            amount=amount,
            label="Glass",
            logged_at=logged_at,
            completed_at=None if active else logged_at + timedelta(minutes=5),
        )

    return _make


@pytest.fixture
def local_utc_plus_2(monkeypatch):
    """Pin the process local timezone to UTC+2 (POSIX TZ string, no zone database needed)."""
    monkeypatch.setenv("TZ", "UTC-02")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def sleep_settings() -> SleepSettings:
    return SleepSettings(target_hours=8)


@pytest.fixture
def hydration_settings() -> HydrationSettings:
    return HydrationSettings(daily_goal=2000)


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
