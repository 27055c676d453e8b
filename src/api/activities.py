"""Synced activity API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_current_user_id, get_strava_service
from src.schemas.strava import ActivityListResponse, ActivityResponse
from src.services.strava_service import StravaService

router = APIRouter(prefix="/api/activities", tags=["activities"])


@router.get("", response_model=ActivityListResponse)
def list_activities(
    user_id: Annotated[int, Depends(get_current_user_id)],
    service: Annotated[StravaService, Depends(get_strava_service)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
    activity_type: Annotated[str | None, Query(alias="activityType")] = None,
):
    """List synced activities, newest first."""
    activities, total = service.list_activities(
        user_id, page=page, limit=limit, activity_type=activity_type
    )
    return ActivityListResponse(
        activities=[ActivityResponse.model_validate(a) for a in activities],
        page=page,
        limit=limit,
        total=total,
    )
