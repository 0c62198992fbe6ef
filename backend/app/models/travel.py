"""
Travel claim models: the travel itself, its records (routes and stays) and the
per-day catering flags used to reduce lump sums.
"""

from sqlalchemy import Column, String, Date, DateTime, Float, Integer, Boolean, ForeignKey, Enum as SQLEnum, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
import enum

from app.db.base import Base, utcnow
from app.models.association_tables import travel_record_receipts


class TravelState(str, enum.Enum):
    """Travel claim state enumeration."""
    REJECTED = "rejected"
    APPLIED_FOR = "appliedFor"
    APPROVED = "approved"
    UNDER_EXAMINATION = "underExamination"
    REFUNDED = "refunded"


class TravelRecordType(str, enum.Enum):
    """Kind of travel record."""
    ROUTE = "route"
    STAY = "stay"


class Transport(str, enum.Enum):
    """Means of transport on a route."""
    OWN_CAR = "ownCar"
    AIRPLANE = "airplane"
    SHIP_OR_FERRY = "shipOrFerry"
    OTHER_TRANSPORT = "otherTransport"


class Purpose(str, enum.Enum):
    """Purpose of a record, decides refundability."""
    PROFESSIONAL = "professional"
    MIXED = "mixed"
    PRIVATE = "private"


def _enum_values(enum_cls):
    return lambda x: [e.value for e in enum_cls]


class Travel(Base):
    """Travel claim. Historic rows are frozen copies linked from their live travel."""

    __tablename__ = "travels"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=True)
    traveler_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    editor_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    state = Column(
        SQLEnum(TravelState, values_callable=_enum_values(TravelState)),
        nullable=False,
        default=TravelState.APPLIED_FOR,
        index=True,
    )
    comment = Column(String(2000), nullable=True)
    reason = Column(String(2000), nullable=False)
    destination_place = Column(String(255), nullable=False)
    travel_inside_of_eu = Column(Boolean, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    advance_amount = Column(Float, nullable=False, default=0)
    advance_currency = Column(String(3), nullable=False)
    professional_share = Column(Float, nullable=True)
    claim_overnight_lump_sum = Column(Boolean, nullable=False, default=True)

    historic = Column(Boolean, nullable=False, default=False, index=True)
    live_travel_id = Column(UUID(as_uuid=True), ForeignKey("travels.id", ondelete="CASCADE"), nullable=True, index=True)
    archived_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    records = relationship(
        "TravelRecord",
        back_populates="travel",
        cascade="all, delete-orphan",
        order_by="TravelRecord.position",
    )
    catering_no_refund = relationship(
        "TravelCateringNoRefund",
        back_populates="travel",
        cascade="all, delete-orphan",
        order_by="TravelCateringNoRefund.date",
    )
    history = relationship(
        "Travel",
        foreign_keys=[live_travel_id],
        cascade="all, delete-orphan",
        order_by="Travel.archived_at",
    )


class TravelRecord(Base):
    """A route or stay inside a travel, with an optional cost in any currency."""

    __tablename__ = "travel_records"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    travel_id = Column(UUID(as_uuid=True), ForeignKey("travels.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    type = Column(SQLEnum(TravelRecordType, values_callable=_enum_values(TravelRecordType)), nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    start_location = Column(String(255), nullable=True)
    end_location = Column(String(255), nullable=True)
    distance = Column(Float, nullable=True)
    location = Column(String(255), nullable=True)
    transport = Column(SQLEnum(Transport, values_callable=_enum_values(Transport)), nullable=True)
    purpose = Column(SQLEnum(Purpose, values_callable=_enum_values(Purpose)), nullable=True)

    cost_amount = Column(Float, nullable=True)
    cost_currency = Column(String(3), nullable=True)
    cost_date = Column(Date, nullable=True)
    # Filled from the monthly rate table when cost_currency is foreign
    exchange_rate_date = Column(DateTime(timezone=True), nullable=True)
    exchange_rate_rate = Column(Float, nullable=True)
    exchange_rate_amount = Column(Float, nullable=True)

    # Relationships
    travel = relationship("Travel", back_populates="records")
    receipts = relationship(
        "DocumentFile",
        secondary=travel_record_receipts,
        order_by="DocumentFile.created_at",
    )


class TravelCateringNoRefund(Base):
    """Meals provided on one day of a travel, excluded from the lump sum."""

    __tablename__ = "travel_catering_no_refund"
    __table_args__ = (
        UniqueConstraint("travel_id", "date", name="uq_catering_travel_date"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    travel_id = Column(UUID(as_uuid=True), ForeignKey("travels.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    breakfast = Column(Boolean, nullable=False, default=False)
    lunch = Column(Boolean, nullable=False, default=False)
    dinner = Column(Boolean, nullable=False, default=False)

    # Relationships
    travel = relationship("Travel", back_populates="catering_no_refund")
