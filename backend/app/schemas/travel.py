"""
Travel Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from datetime import date, datetime, timezone
from uuid import UUID
from enum import Enum

from app.schemas.document_file import ReceiptSummary


class TravelStateEnum(str, Enum):
    """Travel state values."""
    REJECTED = "rejected"
    APPLIED_FOR = "appliedFor"
    APPROVED = "approved"
    UNDER_EXAMINATION = "underExamination"
    REFUNDED = "refunded"


class TravelRecordTypeEnum(str, Enum):
    """Travel record type values."""
    ROUTE = "route"
    STAY = "stay"


class TransportEnum(str, Enum):
    """Transport values."""
    OWN_CAR = "ownCar"
    AIRPLANE = "airplane"
    SHIP_OR_FERRY = "shipOrFerry"
    OTHER_TRANSPORT = "otherTransport"


class PurposeEnum(str, Enum):
    """Record purpose values."""
    PROFESSIONAL = "professional"
    MIXED = "mixed"
    PRIVATE = "private"


class TravelRecordBase(BaseModel):
    """Base schema for a travel record."""
    type: TravelRecordTypeEnum
    start_date: datetime
    end_date: datetime
    start_location: Optional[str] = Field(None, max_length=255)
    end_location: Optional[str] = Field(None, max_length=255)
    distance: Optional[float] = Field(None, ge=0)
    location: Optional[str] = Field(None, max_length=255)
    transport: Optional[TransportEnum] = None
    purpose: Optional[PurposeEnum] = None
    cost_amount: Optional[float] = Field(None, ge=0)
    cost_currency: Optional[str] = Field(None, min_length=3, max_length=3)
    cost_date: Optional[date] = None


class TravelRecordCreate(TravelRecordBase):
    """Create schema for a travel record; receipts are referenced by file ID."""
    receipt_ids: List[UUID] = Field(default_factory=list)

    @field_validator("cost_date")
    @classmethod
    def _cost_date_not_in_future(cls, value: Optional[date]) -> Optional[date]:
        if value is not None and value > datetime.now(timezone.utc).date():
            raise ValueError("cost_date cannot be in the future")
        return value


class TravelRecordResponse(TravelRecordBase):
    """Response schema for a travel record."""
    id: UUID
    position: int
    exchange_rate_date: Optional[datetime] = None
    exchange_rate_rate: Optional[float] = None
    exchange_rate_amount: Optional[float] = None
    receipts: List[ReceiptSummary] = []

    class Config:
        from_attributes = True


class CateringDay(BaseModel):
    """Meals provided on one day of the travel."""
    date: date
    breakfast: bool = False
    lunch: bool = False
    dinner: bool = False

    class Config:
        from_attributes = True


class TravelBase(BaseModel):
    """Base schema for a travel."""
    name: Optional[str] = Field(None, max_length=255)
    reason: str = Field(..., min_length=1, max_length=2000)
    destination_place: str = Field(..., min_length=1, max_length=255)
    travel_inside_of_eu: bool
    start_date: date
    end_date: date
    advance_amount: float = Field(default=0, ge=0)
    advance_currency: str = Field(..., min_length=3, max_length=3)
    professional_share: Optional[float] = Field(None, ge=0.5, le=0.8)
    claim_overnight_lump_sum: bool = True


class TravelCreate(TravelBase):
    """Create schema for a travel."""
    traveler_id: UUID
    editor_id: UUID
    records: List[TravelRecordCreate] = Field(default_factory=list)

    @model_validator(mode="after")
    def _end_not_before_start(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class ReceiptAttach(BaseModel):
    """Files to add to the receipts of a record."""
    receipt_ids: List[UUID] = Field(..., min_length=1)


class TravelTransition(BaseModel):
    """Body of a state transition; an empty comment is ignored."""
    comment: Optional[str] = Field(None, max_length=2000)


class TravelResponse(TravelBase):
    """Response schema for a travel."""
    id: UUID
    traveler_id: UUID
    editor_id: UUID
    state: TravelStateEnum
    comment: Optional[str] = None
    historic: bool
    archived_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    records: List[TravelRecordResponse] = []
    catering_no_refund: List[CateringDay] = []
    history: List[UUID] = []


class TravelListResponse(BaseModel):
    """Schema for travel list response."""
    items: List[TravelResponse]
    total: int
