"""
Generic repository base.
Repositories own the queries; services never build statements themselves.
"""

from typing import Any, Dict, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Creation and lookups shared by all repositories."""

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    async def create(self, **kwargs) -> ModelType:
        """
        Create a new record.

        Args:
            **kwargs: Model attributes

        Returns:
            Created model instance
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        return instance

    def _where(self, query: Select, filters: Dict[str, Any]) -> Select:
        """Add an equality condition per filter; unknown column names raise."""
        for column, value in filters.items():
            query = query.where(getattr(self.model, column) == value)
        return query

    async def get(self, id: UUID) -> Optional[ModelType]:
        """Row by primary key, or None."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def find_one(self, **filters) -> Optional[ModelType]:
        """
        First row whose columns equal all given values.

        Args:
            **filters: Column name to value

        Returns:
            Model instance or None
        """
        query = self._where(select(self.model), filters).limit(1)
        result = await self.session.execute(query)
        return result.scalars().first()
