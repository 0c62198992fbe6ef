"""
Uploaded documents. Receipts of travel costs are stored here and referenced
from travel records; historic copies of a travel share the same files.
"""

from sqlalchemy import Column, String, Integer, LargeBinary, DateTime, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import deferred
import uuid
import enum

from app.db.base import Base, utcnow


class DocumentFileType(str, enum.Enum):
    """Accepted media types."""
    JPEG = "image/jpeg"
    PNG = "image/png"
    PDF = "application/pdf"


class DocumentFile(Base):
    """A stored file; the content is only loaded when explicitly requested."""

    __tablename__ = "document_files"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False)
    type = Column(
        SQLEnum(DocumentFileType, values_callable=lambda x: [e.value for e in DocumentFileType]),
        nullable=False,
    )
    size = Column(Integer, nullable=False)
    data = deferred(Column(LargeBinary, nullable=False))
    owner_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<DocumentFile(name={self.name}, type={self.type}, size={self.size})>"
