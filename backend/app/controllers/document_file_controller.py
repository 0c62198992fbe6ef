"""
Document file controller.
"""

from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.models.document_file import DocumentFile
from app.services.document_file_service import DocumentFileService
from app.schemas.document_file import DocumentFileResponse


class DocumentFileController(BaseController):
    """Controller for file uploads and downloads."""

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.file_service = DocumentFileService(session)

    async def upload_file(self, owner_id: UUID, name: str, content_type: str, data: bytes) -> DocumentFileResponse:
        """Store an uploaded file."""
        return await self.file_service.upload_file(owner_id, name, content_type, data)

    async def get_file(self, file_id: UUID) -> DocumentFileResponse:
        """Get file metadata."""
        return await self.file_service.get_file(file_id)

    async def download_file(self, file_id: UUID) -> DocumentFile:
        """Get file with content."""
        return await self.file_service.download_file(file_id)
