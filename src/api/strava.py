"""Strava OAuth and sync endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from src.api.dependencies import get_current_user_id, get_strava_service
from src.config import get_settings
from src.schemas.base import MessageResponse
from src.schemas.strava import StravaConnectResponse, StravaStatusResponse, StravaSyncResponse
from src.services.errors import ServiceError, ValidationError
from src.services.strava_service import StravaService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth/strava", tags=["strava"])


@router.get("/connect", response_model=StravaConnectResponse)
def connect(
    user_id: Annotated[int, Depends(get_current_user_id)],
    service: Annotated[StravaService, Depends(get_strava_service)],
):
    """Get the Strava authorization URL for the current user."""
    return StravaConnectResponse(auth_url=service.authorization_url(user_id))


@router.get("/callback")
async def callback(
    service: Annotated[StravaService, Depends(get_strava_service)],
    code: str | None = None,
    state: str | None = None,
) -> RedirectResponse:
    """OAuth redirect target: store the connection and send the user back to the app."""
    if not code or not state:
        raise ValidationError("Missing authorization code or state")

    dashboard_url = f"{get_settings().frontend_url}/dashboard"
    try:
        await service.complete_authorization(code, state)
    except ServiceError as e:
        logger.warning(f"Strava callback failed: {e.message}")
        return RedirectResponse(f"{dashboard_url}?strava=error")
    return RedirectResponse(f"{dashboard_url}?strava=connected")


@router.get("/status", response_model=StravaStatusResponse, response_model_exclude_unset=True)
def connection_status(
    user_id: Annotated[int, Depends(get_current_user_id)],
    service: Annotated[StravaService, Depends(get_strava_service)],
):
    """Report whether Strava is connected and whether its token has expired."""
    return StravaStatusResponse(**service.status(user_id))


@router.post("/sync", response_model=StravaSyncResponse)
async def sync(
    user_id: Annotated[int, Depends(get_current_user_id)],
    service: Annotated[StravaService, Depends(get_strava_service)],
):
    """Pull recent Strava activities into the activity table."""
    result = await service.sync_activities(user_id)
    return StravaSyncResponse(message="Activities synced successfully", **result)


@router.post("/disconnect", response_model=MessageResponse)
def disconnect(
    user_id: Annotated[int, Depends(get_current_user_id)],
    service: Annotated[StravaService, Depends(get_strava_service)],
):
    """Remove the Strava connection; already-synced activities are kept."""
    service.disconnect(user_id)
    return MessageResponse(message="Strava disconnected")
