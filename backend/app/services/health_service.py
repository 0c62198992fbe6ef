"""
Health service: database check plus a summary of the exchange rate cache.
"""

import time
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.config import settings
from app.db import session as db_session
from app.db.repositories.health_repository import HealthRepository
from app.schemas.health import HealthResponse


class HealthService:
    """Builds health reports. One instance lives for the whole process."""

    def __init__(self, session_maker: Optional[async_sessionmaker[AsyncSession]] = None):
        self.start_time = time.monotonic()
        self._session_maker = session_maker

    def _get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        return self._session_maker or db_session.async_session_maker or db_session.create_sessionmaker()

    async def get_health(self) -> HealthResponse:
        uptime_seconds = int(time.monotonic() - self.start_time)
        checks = {}
        latest_month = None

        try:
            async with self._get_session_maker()() as session:
                repo = HealthRepository(session)
                if await repo.check_database():
                    checks["database"] = "ok"
                    latest = await repo.latest_rate_month()
                    if latest:
                        latest_month = f"{latest[0]:04d}-{latest[1]:02d}"
                else:
                    checks["database"] = "error"
        except (SQLAlchemyError, OSError, ImportError) as e:
            checks["database"] = f"error: {e}"

        return HealthResponse(
            status="ok" if checks.get("database") == "ok" else "degraded",
            version=settings.VERSION,
            uptime=f"PT{uptime_seconds}S",
            checks=checks,
            base_currency=settings.BASE_CURRENCY,
            latest_rate_month=latest_month,
        )
