"""
Pytest configuration and fixtures.
Provides test app client, async DB session replacement and a fake rate source.
"""

from typing import Dict, List, Optional, Tuple

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  registers the tables on Base.metadata
from app.core.integrations.inforeuro import MonthlyRate
from app.db import session as db_session
from app.db.base import Base
from app.db.session import get_db
from app.deps.di_container import get_rate_source
from app.main import app, limiter


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

DEFAULT_RATES = {"USD": 1.25, "GBP": 0.8, "CHF": 0.95, "JPY": 160.0}


class FakeRateSource:
    """
    In-memory monthly rate source. Every month publishes the same table
    unless a month-specific one is given; calls are recorded.
    """

    def __init__(
        self,
        rates: Optional[Dict[str, float]] = None,
        months: Optional[Dict[Tuple[int, int], Dict[str, float]]] = None,
        fail: bool = False,
    ):
        self.rates = DEFAULT_RATES if rates is None else rates
        self.months = months or {}
        self.fail = fail
        self.calls: List[Tuple[int, int]] = []

    async def fetch_monthly_rates(self, year: int, month: int) -> Optional[List[MonthlyRate]]:
        self.calls.append((year, month))
        if self.fail:
            return None
        table = self.months.get((year, month), self.rates)
        return [MonthlyRate(country=None, currency=code, value=value) for code, value in table.items()]


@pytest.fixture(scope="function")
async def test_engine():
    """In-memory SQLite engine with all tables created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
def test_session_maker(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture(scope="function")
async def test_db_session(test_session_maker):
    """
    Create a test database session.
    Uses in-memory SQLite for fast tests.
    """
    async with test_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
def rate_source_factory():
    return FakeRateSource


@pytest.fixture(scope="function")
def rate_source(rate_source_factory):
    return rate_source_factory()


@pytest.fixture(scope="function")
async def test_client(test_session_maker, rate_source, monkeypatch):
    """
    Create a test HTTP client backed by the test database and the fake rate source.
    """
    async def override_get_db():
        async with test_session_maker() as session:
            yield session
            await session.commit()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_rate_source] = lambda: rate_source
    monkeypatch.setattr(db_session, "async_session_maker", test_session_maker)
    monkeypatch.setattr(limiter, "enabled", False)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
