"""
Base controller class.
"""

from abc import ABC
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.integrations.inforeuro import MonthlyRateSource


class BaseController(ABC):
    """Controllers build their services from the request session and, where needed, the shared rate source."""

    def __init__(self, session: AsyncSession, rate_source: Optional[MonthlyRateSource] = None):
        self.session = session
        self.rate_source = rate_source
