"""Supplement intake tracking API endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_user_id, get_tracking_service
from src.schemas.base import MessageResponse
from src.schemas.tracking import (
    IntakeLogCreate,
    IntakeLogCreateResponse,
    IntakeLogListResponse,
    IntakeLogResponse,
)
from src.services.tracking_service import TrackingService

router = APIRouter(prefix="/api/supplement-tracking", tags=["supplement-tracking"])


@router.post("/log", response_model=IntakeLogCreateResponse, status_code=status.HTTP_201_CREATED)
def log_intake(
    entry_data: IntakeLogCreate,
    user_id: Annotated[int, Depends(get_current_user_id)],
    service: Annotated[TrackingService, Depends(get_tracking_service)],
):
    """Log a supplement dose."""
    entry = service.log_intake(
        user_id,
        supplement_name=entry_data.supplement_name,
        dosage=entry_data.dosage,
        unit=entry_data.unit,
        taken_at=entry_data.taken_at,
        supplement_id=entry_data.supplement_id,
        brand_name=entry_data.brand_name,
        notes=entry_data.notes,
        source=entry_data.source,
    )
    return IntakeLogCreateResponse(
        message="Supplement intake logged successfully",
        tracking_id=entry.id,
    )


@router.get("", response_model=IntakeLogListResponse)
def list_intake(
    user_id: Annotated[int, Depends(get_current_user_id)],
    service: Annotated[TrackingService, Depends(get_tracking_service)],
    start_date: Annotated[date | None, Query(alias="startDate")] = None,
    end_date: Annotated[date | None, Query(alias="endDate")] = None,
):
    """List intake entries, optionally within an inclusive date range."""
    entries = service.list_intake(user_id, start_date=start_date, end_date=end_date)
    return IntakeLogListResponse(
        tracking=[IntakeLogResponse.model_validate(entry) for entry in entries]
    )


@router.delete("/{entry_id}", response_model=MessageResponse)
def delete_intake(
    entry_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    service: Annotated[TrackingService, Depends(get_tracking_service)],
):
    """Delete one of the user's intake entries."""
    service.delete_intake(user_id, entry_id)
    return MessageResponse(message="Tracking entry deleted successfully")
