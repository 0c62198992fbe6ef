"""
Document file Pydantic schemas.
"""

from pydantic import BaseModel
from datetime import datetime
from uuid import UUID
from enum import Enum


class DocumentFileTypeEnum(str, Enum):
    """Accepted media types of uploaded files."""
    JPEG = "image/jpeg"
    PNG = "image/png"
    PDF = "application/pdf"


class DocumentFileResponse(BaseModel):
    """Metadata of a stored file; the content is downloaded separately."""
    id: UUID
    name: str
    type: DocumentFileTypeEnum
    size: int
    owner_id: UUID
    created_at: datetime

    class Config:
        from_attributes = True


class ReceiptSummary(BaseModel):
    """A receipt as listed on a travel record."""
    id: UUID
    name: str
    type: DocumentFileTypeEnum

    class Config:
        from_attributes = True
