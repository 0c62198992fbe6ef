"""
Document file service: upload and download of receipts.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import DomainValidationError, NotFoundError
from app.db.repositories.document_file_repository import DocumentFileRepository
from app.models.document_file import DocumentFile, DocumentFileType
from app.schemas.document_file import DocumentFileResponse
from app.services.base_service import BaseService

logger = logging.getLogger(__name__)

ALLOWED_TYPES = [t.value for t in DocumentFileType]


class DocumentFileService(BaseService):
    """Service for stored files."""

    def __init__(self, session: AsyncSession, max_size: Optional[int] = None):
        super().__init__(session)
        self.file_repo = DocumentFileRepository(session)
        self.max_size = max_size if max_size is not None else settings.MAX_RECEIPT_SIZE_BYTES

    async def upload_file(
        self,
        owner_id: UUID,
        name: str,
        content_type: Optional[str],
        data: bytes,
    ) -> DocumentFileResponse:
        """
        Store an uploaded file for its owner.

        Raises:
            DomainValidationError: Unsupported type, empty or oversized content
        """
        if content_type not in ALLOWED_TYPES:
            raise DomainValidationError(
                f"File type {content_type} is not allowed",
                details={"allowed_types": ALLOWED_TYPES},
            )
        if not data:
            raise DomainValidationError("File is empty")
        if len(data) > self.max_size:
            raise DomainValidationError(
                "File is too large",
                details={"size": len(data), "max_size": self.max_size},
            )

        document = await self.file_repo.create(
            name=name or "receipt",
            type=DocumentFileType(content_type),
            size=len(data),
            data=data,
            owner_id=owner_id,
        )
        await self.session.commit()
        logger.info(
            "File uploaded",
            extra={"file_id": str(document.id), "owner_id": str(owner_id), "size": document.size},
        )
        return DocumentFileResponse.model_validate(document)

    async def get_file(self, file_id: UUID) -> DocumentFileResponse:
        """Metadata of a file."""
        document = await self.file_repo.get(file_id)
        if not document:
            raise NotFoundError("File not found", details={"file_id": str(file_id)})
        return DocumentFileResponse.model_validate(document)

    async def download_file(self, file_id: UUID) -> DocumentFile:
        """File with its content loaded."""
        document = await self.file_repo.get_with_data(file_id)
        if not document:
            raise NotFoundError("File not found", details={"file_id": str(file_id)})
        return document
