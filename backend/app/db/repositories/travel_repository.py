"""
Travel repository for database operations.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from app.db.repositories.base_repository import BaseRepository
from app.models.travel import Travel, TravelRecord, TravelState


def _detail_options():
    return (
        selectinload(Travel.records).selectinload(TravelRecord.receipts),
        selectinload(Travel.catering_no_refund),
        selectinload(Travel.history),
    )


class TravelRepository(BaseRepository[Travel]):
    """Repository for travel operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Travel, session)

    async def get(self, id: UUID) -> Optional[Travel]:
        """Get travel by ID with records, catering days and history loaded."""
        result = await self.session.execute(
            select(Travel)
            .options(*_detail_options())
            .where(Travel.id == id)
        )
        return result.scalar_one_or_none()

    async def get_for_delete(self, id: UUID) -> Optional[Travel]:
        """Get travel with every collection the delete cascade walks through."""
        result = await self.session.execute(
            select(Travel)
            .options(
                *_detail_options(),
                selectinload(Travel.history).selectinload(Travel.records).selectinload(TravelRecord.receipts),
                selectinload(Travel.history).selectinload(Travel.catering_no_refund),
                selectinload(Travel.history).selectinload(Travel.history),
            )
            .where(Travel.id == id)
        )
        return result.scalar_one_or_none()

    async def list_live(
        self,
        skip: int = 0,
        limit: int = 100,
        state: Optional[TravelState] = None,
    ) -> List[Travel]:
        """List non-historic travels, newest first."""
        query = select(Travel).options(*_detail_options()).where(Travel.historic.is_(False))
        if state is not None:
            query = query.where(Travel.state == state)
        query = query.order_by(Travel.created_at.desc()).offset(skip).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_live(self, state: Optional[TravelState] = None) -> int:
        """Count non-historic travels."""
        query = select(func.count()).select_from(Travel).where(Travel.historic.is_(False))
        if state is not None:
            query = query.where(Travel.state == state)
        result = await self.session.execute(query)
        return result.scalar_one()

    async def list_history(self, live_travel_id: UUID) -> List[Travel]:
        """Historic copies of a travel, oldest first."""
        result = await self.session.execute(
            select(Travel)
            .options(*_detail_options())
            .where(Travel.live_travel_id == live_travel_id)
            .order_by(Travel.archived_at)
        )
        return list(result.scalars().all())

    async def delete_travel(self, travel: Travel) -> None:
        """Delete a travel loaded with get_for_delete, cascading to its children."""
        await self.session.delete(travel)
        await self.session.flush()
