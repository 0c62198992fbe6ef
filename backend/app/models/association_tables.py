"""
Association tables for many-to-many relationships.
"""

from sqlalchemy import Table, Column, ForeignKey
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base

# TravelRecord <-> DocumentFile (receipts of a record's cost)
travel_record_receipts = Table(
    "travel_record_receipts",
    Base.metadata,
    Column("record_id", UUID(as_uuid=True), ForeignKey("travel_records.id", ondelete="CASCADE"), primary_key=True),
    Column("file_id", UUID(as_uuid=True), ForeignKey("document_files.id", ondelete="CASCADE"), primary_key=True),
)
