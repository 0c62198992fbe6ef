"""Models package - import all models for SQLAlchemy registration."""
from app.models.association_tables import travel_record_receipts
from app.models.document_file import DocumentFile, DocumentFileType
from app.models.exchange_rate import ExchangeRate
from app.models.travel import (
    Travel,
    TravelRecord,
    TravelCateringNoRefund,
    TravelState,
    TravelRecordType,
    Transport,
    Purpose,
)

__all__ = [
    "travel_record_receipts",
    "DocumentFile",
    "DocumentFileType",
    "ExchangeRate",
    "Travel",
    "TravelRecord",
    "TravelCateringNoRefund",
    "TravelState",
    "TravelRecordType",
    "Transport",
    "Purpose",
]
