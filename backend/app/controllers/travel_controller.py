"""
Travel controller.
"""

import io
from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.core.integrations.inforeuro import MonthlyRateSource
from app.models.travel import TravelState
from app.services.exchange_rate_service import ExchangeRateService
from app.services.travel_report_service import TravelReportService
from app.services.travel_service import TravelService
from app.schemas.travel import (
    CateringDay,
    TravelCreate,
    TravelListResponse,
    TravelRecordCreate,
    TravelResponse,
    TravelStateEnum,
)


class TravelController(BaseController):
    """Controller for travel operations."""

    def __init__(self, session: AsyncSession, rate_source: MonthlyRateSource):
        super().__init__(session, rate_source)
        self.travel_service = TravelService(session, ExchangeRateService(session, rate_source))
        self.report_service = TravelReportService(session)

    async def create_travel(self, travel_data: TravelCreate) -> TravelResponse:
        """Create a new travel."""
        return await self.travel_service.create_travel(travel_data)

    async def get_travel(self, travel_id: UUID) -> Optional[TravelResponse]:
        """Get travel by ID."""
        return await self.travel_service.get_travel(travel_id)

    async def list_travels(
        self,
        skip: int = 0,
        limit: int = 100,
        state: Optional[TravelStateEnum] = None,
    ) -> TravelListResponse:
        """List travels with pagination."""
        travels, total = await self.travel_service.list_travels(
            skip=skip,
            limit=limit,
            state=TravelState(state.value) if state else None,
        )
        return TravelListResponse(items=travels, total=total)

    async def list_history(self, travel_id: UUID) -> List[TravelResponse]:
        """Archived versions of a travel."""
        return await self.travel_service.list_history(travel_id)

    async def replace_records(self, travel_id: UUID, records: List[TravelRecordCreate]) -> TravelResponse:
        """Replace the records of a travel."""
        return await self.travel_service.replace_records(travel_id, records)

    async def update_catering_days(self, travel_id: UUID, days: List[CateringDay]) -> TravelResponse:
        """Update meal flags of travel days."""
        return await self.travel_service.update_catering_days(travel_id, days)

    async def attach_receipts(self, travel_id: UUID, record_id: UUID, receipt_ids: List[UUID]) -> TravelResponse:
        """Add receipts to a record."""
        return await self.travel_service.attach_receipts(travel_id, record_id, receipt_ids)

    async def transition(self, travel_id: UUID, transition: str, comment: Optional[str] = None) -> TravelResponse:
        """Move a travel to its next state."""
        return await self.travel_service.transition(travel_id, transition, comment)

    async def delete_travel(self, travel_id: UUID) -> bool:
        """Delete a travel."""
        return await self.travel_service.delete_travel(travel_id)

    async def export_travels_tsv(self) -> str:
        """Tab separated overview of all travels."""
        return await self.report_service.export_travels_tsv()

    async def export_travel_to_excel(self, travel_id: UUID) -> io.BytesIO:
        """Excel report of one travel."""
        return await self.report_service.export_travel_to_excel(travel_id)
