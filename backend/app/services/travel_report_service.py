"""
Travel reports: a tab separated overview of all travels and an Excel report
per travel.
"""

import io
import logging
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter

from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.db.repositories.travel_repository import TravelRepository
from app.models.travel import Travel
from app.services.base_service import BaseService
from app.utils.csv_export import objects_to_csv
from app.utils.date_utils import get_flag_emoji

logger = logging.getLogger(__name__)

HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="305496", end_color="305496", fill_type="solid")

RECORD_COLUMNS = [
    ("Type", "type"),
    ("Start", "start_date"),
    ("End", "end_date"),
    ("From", "start_location"),
    ("To", "end_location"),
    ("Location", "location"),
    ("Transport", "transport"),
    ("Distance", "distance"),
    ("Purpose", "purpose"),
    ("Cost", "cost_amount"),
    ("Currency", "cost_currency"),
    ("Cost date", "cost_date"),
    ("Rate", "exchange_rate_rate"),
    ("Rate date", "exchange_rate_date"),
    ("Cost ({base})", "exchange_rate_amount"),
]


def _cell_value(value: Any) -> Any:
    """Excel cannot hold enums, UUIDs or aware datetimes."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    return value


class TravelReportService(BaseService):
    """Service for travel exports."""

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.travel_repo = TravelRepository(session)

    async def export_travels_tsv(self, limit: int = 10000) -> str:
        """All live travels as tab separated text, one row per travel."""
        travels = await self.travel_repo.list_live(skip=0, limit=limit)
        rows = [self._overview_row(t) for t in travels]
        logger.info("Exporting travel overview", extra={"travels": len(rows)})
        return objects_to_csv(rows)

    def _overview_row(self, travel: Travel) -> Dict[str, Any]:
        return {
            "id": str(travel.id),
            "name": travel.name,
            "state": travel.state,
            "traveler_id": str(travel.traveler_id),
            "editor_id": str(travel.editor_id),
            "destination_place": travel.destination_place,
            "travel_inside_of_eu": travel.travel_inside_of_eu,
            "start_date": travel.start_date,
            "end_date": travel.end_date,
            "advance": f"{travel.advance_amount:.2f} {travel.advance_currency}",
            "records": len(travel.records),
            "history": [str(h.id) for h in travel.history],
            "comment": travel.comment,
        }

    async def export_travel_to_excel(self, travel_id: UUID) -> io.BytesIO:
        """Excel report of one travel: summary, records and catering days."""
        travel = await self.travel_repo.get(travel_id)
        if not travel:
            raise NotFoundError("Travel not found", details={"travel_id": str(travel_id)})

        wb = Workbook()
        ws = wb.active
        ws.title = "Summary"
        self._write_summary(ws, travel)

        records_ws = wb.create_sheet("Records")
        self._write_records(records_ws, travel)

        catering_ws = wb.create_sheet("Catering")
        self._write_catering(catering_ws, travel)

        output = io.BytesIO()
        wb.save(output)
        output.seek(0)
        return output

    def _write_header(self, ws, headers: List[str]) -> None:
        for col, header in enumerate(headers, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL
            cell.alignment = Alignment(horizontal="center")
            ws.column_dimensions[get_column_letter(col)].width = max(12, len(header) + 4)

    def _write_summary(self, ws, travel: Travel) -> None:
        currency_flag = get_flag_emoji(travel.advance_currency) or ""
        summary = [
            ("Name", travel.name),
            ("State", travel.state),
            ("Reason", travel.reason),
            ("Destination", travel.destination_place),
            ("Inside of EU", "yes" if travel.travel_inside_of_eu else "no"),
            ("Start", travel.start_date),
            ("End", travel.end_date),
            ("Advance", f"{travel.advance_amount:.2f} {travel.advance_currency} {currency_flag}".strip()),
            ("Professional share", travel.professional_share),
            ("Claim overnight lump sum", "yes" if travel.claim_overnight_lump_sum else "no"),
            ("Comment", travel.comment),
            ("Archived versions", len(travel.history)),
        ]
        for row, (label, value) in enumerate(summary, start=1):
            ws.cell(row=row, column=1, value=label).font = Font(bold=True)
            ws.cell(row=row, column=2, value=_cell_value(value))
        ws.column_dimensions["A"].width = 28
        ws.column_dimensions["B"].width = 40

        total_row = len(summary) + 2
        ws.cell(row=total_row, column=1, value=f"Converted costs ({settings.BASE_CURRENCY})").font = Font(bold=True)
        ws.cell(row=total_row, column=2, value=self._converted_total(travel))

    def _converted_total(self, travel: Travel) -> float:
        total = 0.0
        for record in travel.records:
            if record.exchange_rate_amount is not None:
                total += record.exchange_rate_amount
            elif record.cost_amount is not None and (
                not record.cost_currency or record.cost_currency.upper() == settings.BASE_CURRENCY.upper()
            ):
                total += record.cost_amount
        return round(total, 2)

    def _write_records(self, ws, travel: Travel) -> None:
        headers = [label.format(base=settings.BASE_CURRENCY) for label, _ in RECORD_COLUMNS]
        self._write_header(ws, headers + ["Receipts"])
        receipts_col = len(RECORD_COLUMNS) + 1
        for row, record in enumerate(travel.records, start=2):
            for col, (_, attr) in enumerate(RECORD_COLUMNS, start=1):
                ws.cell(row=row, column=col, value=_cell_value(getattr(record, attr)))
            ws.cell(row=row, column=receipts_col, value=", ".join(f.name for f in record.receipts))

    def _write_catering(self, ws, travel: Travel) -> None:
        self._write_header(ws, ["Date", "Breakfast", "Lunch", "Dinner"])
        for row, day in enumerate(travel.catering_no_refund, start=2):
            ws.cell(row=row, column=1, value=day.date if isinstance(day.date, date) else None)
            ws.cell(row=row, column=2, value="x" if day.breakfast else "")
            ws.cell(row=row, column=3, value="x" if day.lunch else "")
            ws.cell(row=row, column=4, value="x" if day.dinner else "")
