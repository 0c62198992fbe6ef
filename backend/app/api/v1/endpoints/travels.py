"""
Travel API endpoints.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse, StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.deps.di_container import get_rate_source
from app.controllers.travel_controller import TravelController
from app.core.integrations.inforeuro import MonthlyRateSource
from app.schemas.travel import (
    CateringDay,
    ReceiptAttach,
    TravelCreate,
    TravelListResponse,
    TravelRecordCreate,
    TravelResponse,
    TravelStateEnum,
    TravelTransition,
)

router = APIRouter()


def get_travel_controller(
    db: AsyncSession = Depends(get_db),
    rate_source: MonthlyRateSource = Depends(get_rate_source),
) -> TravelController:
    return TravelController(db, rate_source)


@router.post("", response_model=TravelResponse, status_code=status.HTTP_201_CREATED)
async def create_travel(
    travel_data: TravelCreate,
    controller: TravelController = Depends(get_travel_controller),
) -> TravelResponse:
    """Create a new travel in state appliedFor."""
    return await controller.create_travel(travel_data)


@router.get("", response_model=TravelListResponse)
async def list_travels(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    state: Optional[TravelStateEnum] = Query(None),
    controller: TravelController = Depends(get_travel_controller),
) -> TravelListResponse:
    """List travels with pagination."""
    return await controller.list_travels(skip=skip, limit=limit, state=state)


@router.get("/export", response_class=PlainTextResponse)
async def export_travels(
    controller: TravelController = Depends(get_travel_controller),
) -> PlainTextResponse:
    """Tab separated overview of all travels."""
    content = await controller.export_travels_tsv()
    return PlainTextResponse(
        content,
        media_type="text/tab-separated-values",
        headers={"Content-Disposition": "attachment; filename=travels.tsv"},
    )


@router.get("/{travel_id}", response_model=TravelResponse)
async def get_travel(
    travel_id: UUID,
    controller: TravelController = Depends(get_travel_controller),
) -> TravelResponse:
    """Get travel by ID."""
    travel = await controller.get_travel(travel_id)
    if not travel:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Travel not found",
        )
    return travel


@router.get("/{travel_id}/history", response_model=List[TravelResponse])
async def get_travel_history(
    travel_id: UUID,
    controller: TravelController = Depends(get_travel_controller),
) -> List[TravelResponse]:
    """Archived versions of a travel, oldest first."""
    return await controller.list_history(travel_id)


@router.put("/{travel_id}/records", response_model=TravelResponse)
async def replace_travel_records(
    travel_id: UUID,
    records: List[TravelRecordCreate],
    controller: TravelController = Depends(get_travel_controller),
) -> TravelResponse:
    """Replace all records of a travel."""
    return await controller.replace_records(travel_id, records)


@router.put("/{travel_id}/catering-no-refund", response_model=TravelResponse)
async def update_catering_days(
    travel_id: UUID,
    days: List[CateringDay],
    controller: TravelController = Depends(get_travel_controller),
) -> TravelResponse:
    """Set the meals provided on days of the travel."""
    return await controller.update_catering_days(travel_id, days)


@router.post("/{travel_id}/records/{record_id}/receipts", response_model=TravelResponse)
async def attach_record_receipts(
    travel_id: UUID,
    record_id: UUID,
    body: ReceiptAttach,
    controller: TravelController = Depends(get_travel_controller),
) -> TravelResponse:
    """Add uploaded files to the receipts of a record."""
    return await controller.attach_receipts(travel_id, record_id, body.receipt_ids)


async def _transition(
    controller: TravelController,
    travel_id: UUID,
    name: str,
    body: Optional[TravelTransition],
) -> TravelResponse:
    comment = body.comment if body else None
    return await controller.transition(travel_id, name, comment)


@router.post("/{travel_id}/approve", response_model=TravelResponse)
async def approve_travel(
    travel_id: UUID,
    body: Optional[TravelTransition] = Body(None),
    controller: TravelController = Depends(get_travel_controller),
) -> TravelResponse:
    """Approve an applied-for travel."""
    return await _transition(controller, travel_id, "approve", body)


@router.post("/{travel_id}/reject", response_model=TravelResponse)
async def reject_travel(
    travel_id: UUID,
    body: Optional[TravelTransition] = Body(None),
    controller: TravelController = Depends(get_travel_controller),
) -> TravelResponse:
    """Reject an applied-for travel."""
    return await _transition(controller, travel_id, "reject", body)


@router.post("/{travel_id}/submit-for-examination", response_model=TravelResponse)
async def submit_travel_for_examination(
    travel_id: UUID,
    body: Optional[TravelTransition] = Body(None),
    controller: TravelController = Depends(get_travel_controller),
) -> TravelResponse:
    """Hand in an approved travel for examination of its costs."""
    return await _transition(controller, travel_id, "submit_for_examination", body)


@router.post("/{travel_id}/refund", response_model=TravelResponse)
async def refund_travel(
    travel_id: UUID,
    body: Optional[TravelTransition] = Body(None),
    controller: TravelController = Depends(get_travel_controller),
) -> TravelResponse:
    """Mark an examined travel as refunded."""
    return await _transition(controller, travel_id, "refund", body)


@router.get("/{travel_id}/report")
async def export_travel_report(
    travel_id: UUID,
    controller: TravelController = Depends(get_travel_controller),
):
    """Excel report of one travel."""
    output = await controller.export_travel_to_excel(travel_id)
    return StreamingResponse(
        output,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={
            "Content-Disposition": f"attachment; filename=travel_{travel_id}.xlsx"
        },
    )


@router.delete("/{travel_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_travel(
    travel_id: UUID,
    controller: TravelController = Depends(get_travel_controller),
):
    """Delete a travel with its history."""
    deleted = await controller.delete_travel(travel_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Travel not found",
        )
