"""
Document file repository for database operations.
"""

from typing import List, Optional, Sequence
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import undefer

from app.db.repositories.base_repository import BaseRepository
from app.models.document_file import DocumentFile


class DocumentFileRepository(BaseRepository[DocumentFile]):
    """Repository for stored files. Plain lookups leave the content unloaded."""

    def __init__(self, session: AsyncSession):
        super().__init__(DocumentFile, session)

    async def get_with_data(self, id: UUID) -> Optional[DocumentFile]:
        """Get file by ID including its content."""
        result = await self.session.execute(
            select(DocumentFile)
            .options(undefer(DocumentFile.data))
            .where(DocumentFile.id == id)
        )
        return result.scalar_one_or_none()

    async def list_by_ids(self, ids: Sequence[UUID]) -> List[DocumentFile]:
        """Files with the given IDs; unknown IDs are skipped."""
        if not ids:
            return []
        result = await self.session.execute(
            select(DocumentFile).where(DocumentFile.id.in_(list(ids)))
        )
        return list(result.scalars().all())
