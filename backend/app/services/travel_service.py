"""
Travel service: travel claims, their records, per-day catering flags and the
history of reviewed versions.
"""

import logging
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DomainValidationError, NotFoundError
from app.db.base import utcnow
from app.db.repositories.document_file_repository import DocumentFileRepository
from app.db.repositories.travel_repository import TravelRepository
from app.models.document_file import DocumentFile
from app.models.travel import (
    Purpose,
    Transport,
    Travel,
    TravelCateringNoRefund,
    TravelRecord,
    TravelRecordType,
    TravelState,
)
from app.schemas.travel import (
    CateringDay,
    TravelCreate,
    TravelRecordCreate,
    TravelRecordResponse,
    TravelResponse,
)
from app.services.base_service import BaseService
from app.services.exchange_rate_service import ExchangeRateService
from app.utils.day_reconciler import reconcile_catering_days, validate_record_order

logger = logging.getLogger(__name__)

# Columns a historic copy gets fresh values for
_NOT_SNAPSHOTTED = {"id", "historic", "live_travel_id", "archived_at", "created_at", "updated_at"}
_CHILD_NOT_COPIED = {"id", "travel_id"}

# transition name -> (states it may start from, resulting state)
TRANSITIONS = {
    "approve": ({TravelState.APPLIED_FOR}, TravelState.APPROVED),
    "reject": ({TravelState.APPLIED_FOR}, TravelState.REJECTED),
    "submit_for_examination": ({TravelState.APPROVED}, TravelState.UNDER_EXAMINATION),
    "refund": ({TravelState.UNDER_EXAMINATION}, TravelState.REFUNDED),
}


def _column_keys(model, excluded: set) -> List[str]:
    return [attr.key for attr in inspect(model).column_attrs if attr.key not in excluded]


class TravelService(BaseService):
    """Service for travel operations."""

    def __init__(self, session: AsyncSession, exchange_rate_service: ExchangeRateService):
        super().__init__(session)
        self.travel_repo = TravelRepository(session)
        self.file_repo = DocumentFileRepository(session)
        self.exchange_rate_service = exchange_rate_service

    async def create_travel(self, travel_data: TravelCreate) -> TravelResponse:
        """Create a travel in state appliedFor."""
        validate_or_raise(travel_data.records)

        data = travel_data.model_dump(exclude={"records"})
        data["advance_currency"] = data["advance_currency"].upper()
        travel = Travel(
            **data,
            state=TravelState.APPLIED_FOR,
            comment=None,
            historic=False,
            live_travel_id=None,
            archived_at=None,
            records=[],
            catering_no_refund=[],
            history=[],
        )
        travel.records = await self._build_records(travel_data.records, travel_data.traveler_id)
        self.session.add(travel)
        await self._save(travel)
        await self.session.commit()
        logger.info("Travel created", extra={"travel_id": str(travel.id)})
        return self._to_response(travel)

    async def get_travel(self, travel_id: UUID) -> Optional[TravelResponse]:
        """Get travel by ID."""
        travel = await self.travel_repo.get(travel_id)
        if not travel:
            return None
        return self._to_response(travel)

    async def list_travels(
        self,
        skip: int = 0,
        limit: int = 100,
        state: Optional[TravelState] = None,
    ) -> Tuple[List[TravelResponse], int]:
        """List live (non-historic) travels with pagination."""
        travels = await self.travel_repo.list_live(skip=skip, limit=limit, state=state)
        total = await self.travel_repo.count_live(state=state)
        return [self._to_response(t) for t in travels], total

    async def list_history(self, travel_id: UUID) -> List[TravelResponse]:
        """Archived versions of a travel, oldest first."""
        await self._get_travel_or_raise(travel_id)
        copies = await self.travel_repo.list_history(travel_id)
        return [self._to_response(t) for t in copies]

    async def replace_records(
        self,
        travel_id: UUID,
        records: Sequence[TravelRecordCreate],
    ) -> TravelResponse:
        """Replace all records of a travel; catering days follow the new records."""
        validate_or_raise(records)
        travel = await self._get_live_travel(travel_id)
        travel.records = await self._build_records(records, travel.traveler_id)
        await self._save(travel)
        await self.session.commit()
        return self._to_response(travel)

    async def update_catering_days(
        self,
        travel_id: UUID,
        days: Sequence[CateringDay],
    ) -> TravelResponse:
        """Set meal flags on days the travel already spans."""
        travel = await self._get_live_travel(travel_id)
        by_date = {row.date: row for row in travel.catering_no_refund}
        unknown = [day.date.isoformat() for day in days if day.date not in by_date]
        if unknown:
            raise DomainValidationError("Dates are outside of the travel records", details=unknown)

        for day in days:
            row = by_date[day.date]
            row.breakfast = day.breakfast
            row.lunch = day.lunch
            row.dinner = day.dinner
        await self._save(travel)
        await self.session.commit()
        return self._to_response(travel)

    async def attach_receipts(
        self,
        travel_id: UUID,
        record_id: UUID,
        receipt_ids: Sequence[UUID],
    ) -> TravelResponse:
        """Add files of the traveler to the receipts of one record."""
        travel = await self._get_live_travel(travel_id)
        record = next((r for r in travel.records if r.id == record_id), None)
        if record is None:
            raise NotFoundError(
                "Record not found",
                details={"travel_id": str(travel_id), "record_id": str(record_id)},
            )

        attached = {f.id for f in record.receipts}
        receipts = await self._resolve_receipts(receipt_ids, travel.traveler_id)
        record.receipts = list(record.receipts) + [f for f in receipts if f.id not in attached]
        await self._save(travel)
        await self.session.commit()
        return self._to_response(travel)

    async def archive_current_version(self, travel_id: UUID) -> Travel:
        """
        Store the persisted state of a travel as a historic copy and link it
        from the travel's history. The live travel's comment is cleared since
        comments belong to one review round.

        Returns:
            The historic copy
        """
        travel = await self._get_live_travel(travel_id)
        # The copy mirrors the stored state
        await self.session.flush()

        snapshot = Travel(
            **{key: getattr(travel, key) for key in _column_keys(Travel, _NOT_SNAPSHOTTED)},
            historic=True,
            archived_at=utcnow(),
            records=[_copy_record(r) for r in travel.records],
            catering_no_refund=[_copy_child(TravelCateringNoRefund, d) for d in travel.catering_no_refund],
            history=[],
        )
        travel.history.append(snapshot)
        travel.comment = None
        await self.session.flush()

        logger.info(
            "Travel version archived",
            extra={
                "travel_id": str(travel.id),
                "historic_travel_id": str(snapshot.id),
                "history_length": len(travel.history),
            },
        )
        return snapshot

    async def transition(
        self,
        travel_id: UUID,
        transition: str,
        comment: Optional[str] = None,
    ) -> TravelResponse:
        """
        Move a travel to its next state. The current version is archived first;
        a non-empty comment is attached to the new state.
        """
        if transition not in TRANSITIONS:
            raise ValueError(f"Unknown transition {transition}")
        allowed_from, to_state = TRANSITIONS[transition]

        travel = await self._get_live_travel(travel_id)
        if travel.state not in allowed_from:
            raise DomainValidationError(
                f"Cannot {transition.replace('_', ' ')} a travel in state {travel.state.value}"
            )

        await self.archive_current_version(travel_id)
        from_state = travel.state
        travel.state = to_state
        if comment and comment.strip():
            travel.comment = comment.strip()
        await self._save(travel)
        await self.session.commit()

        logger.info(
            "Travel state changed",
            extra={
                "travel_id": str(travel.id),
                "from_state": from_state.value,
                "to_state": to_state.value,
            },
        )
        return self._to_response(travel)

    async def delete_travel(self, travel_id: UUID) -> bool:
        """Delete a travel together with its records, days and history."""
        travel = await self.travel_repo.get_for_delete(travel_id)
        if not travel:
            return False
        if travel.historic:
            raise DomainValidationError("Historic travels cannot be deleted on their own")
        await self.travel_repo.delete_travel(travel)
        await self.session.commit()
        return True

    async def _get_travel_or_raise(self, travel_id: UUID) -> Travel:
        travel = await self.travel_repo.get(travel_id)
        if not travel:
            raise NotFoundError("Travel not found", details={"travel_id": str(travel_id)})
        return travel

    async def _get_live_travel(self, travel_id: UUID) -> Travel:
        travel = await self._get_travel_or_raise(travel_id)
        if travel.historic:
            raise DomainValidationError("Historic travels cannot be modified")
        return travel

    async def _resolve_receipts(self, receipt_ids: Sequence[UUID], owner_id: UUID) -> List[DocumentFile]:
        """
        Files usable as receipts of the given owner, in request order.
        Unknown files and files of other owners are left out.
        """
        unique_ids = list(dict.fromkeys(receipt_ids))
        found = {f.id: f for f in await self.file_repo.list_by_ids(unique_ids)}
        receipts = []
        for file_id in unique_ids:
            document = found.get(file_id)
            if document is None or document.owner_id != owner_id:
                logger.warning(
                    "Receipt dropped",
                    extra={"file_id": str(file_id), "owner_id": str(owner_id), "found": document is not None},
                )
                continue
            receipts.append(document)
        return receipts

    async def _build_records(self, records: Sequence[TravelRecordCreate], owner_id: UUID) -> List[TravelRecord]:
        built = []
        for position, record_data in enumerate(records):
            data = record_data.model_dump(exclude={"type", "transport", "purpose", "receipt_ids"})
            if data["cost_currency"]:
                data["cost_currency"] = data["cost_currency"].upper()
            record = TravelRecord(
                **data,
                type=TravelRecordType(record_data.type.value),
                transport=Transport(record_data.transport.value) if record_data.transport else None,
                purpose=Purpose(record_data.purpose.value) if record_data.purpose else None,
                position=position,
                exchange_rate_date=None,
                exchange_rate_rate=None,
                exchange_rate_amount=None,
                receipts=await self._resolve_receipts(record_data.receipt_ids, owner_id),
            )
            await self._convert_cost(record)
            built.append(record)
        return built

    async def _convert_cost(self, record: TravelRecord) -> None:
        if record.cost_amount is None or not record.cost_currency:
            return
        result = await self.exchange_rate_service.convert(
            record.start_date,
            record.cost_amount,
            record.cost_currency,
        )
        if result is None:
            return
        record.exchange_rate_date = result.date
        record.exchange_rate_rate = result.rate
        record.exchange_rate_amount = result.amount

    async def _save(self, travel: Travel) -> None:
        """Recompute the catering days, then flush. Runs on every travel write."""
        self._reconcile_catering_days(travel)
        await self.session.flush()

    def _reconcile_catering_days(self, travel: Travel) -> None:
        try:
            days = reconcile_catering_days(travel.records, travel.catering_no_refund)
        except ValueError as e:
            raise DomainValidationError(str(e)) from e

        # Surviving dates keep their row, (travel_id, date) is unique
        current = {row.date: row for row in travel.catering_no_refund}
        rows = []
        for day in days:
            row = current.get(day.date)
            if row is None:
                row = TravelCateringNoRefund(
                    date=day.date,
                    breakfast=day.breakfast,
                    lunch=day.lunch,
                    dinner=day.dinner,
                )
            rows.append(row)
        travel.catering_no_refund = rows

    def _to_response(self, travel: Travel) -> TravelResponse:
        return TravelResponse(
            id=travel.id,
            name=travel.name,
            traveler_id=travel.traveler_id,
            editor_id=travel.editor_id,
            state=travel.state.value,
            comment=travel.comment,
            reason=travel.reason,
            destination_place=travel.destination_place,
            travel_inside_of_eu=travel.travel_inside_of_eu,
            start_date=travel.start_date,
            end_date=travel.end_date,
            advance_amount=travel.advance_amount,
            advance_currency=travel.advance_currency,
            professional_share=travel.professional_share,
            claim_overnight_lump_sum=travel.claim_overnight_lump_sum,
            historic=travel.historic,
            archived_at=travel.archived_at,
            created_at=travel.created_at,
            updated_at=travel.updated_at,
            records=[TravelRecordResponse.model_validate(r) for r in travel.records],
            catering_no_refund=[CateringDay.model_validate(d) for d in travel.catering_no_refund],
            history=[h.id for h in travel.history],
        )


def validate_or_raise(records: Sequence[TravelRecordCreate]) -> None:
    """Check record ordering before anything is written."""
    try:
        validate_record_order(records)
    except ValueError as e:
        raise DomainValidationError(str(e)) from e


def _copy_child(model, instance):
    return model(**{key: getattr(instance, key) for key in _column_keys(model, _CHILD_NOT_COPIED)})


def _copy_record(record: TravelRecord) -> TravelRecord:
    # Copies share the stored files
    copy = _copy_child(TravelRecord, record)
    copy.receipts = list(record.receipts)
    return copy
