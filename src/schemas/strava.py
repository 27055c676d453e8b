"""Strava connection and activity schemas."""

from datetime import datetime
from typing import Any

from pydantic import ConfigDict

from src.schemas.base import CamelModel


class StravaConnectResponse(CamelModel):
    """Where to send the user to authorize Strava access."""

    auth_url: str


class StravaStatusResponse(CamelModel):
    """Connection status; only `connected` is set when there is no connection."""

    connected: bool
    expired: bool | None = None
    athlete_data: dict[str, Any] | None = None
    last_sync: datetime | None = None


class StravaSyncResponse(CamelModel):
    """Sync outcome."""

    message: str
    synced_count: int
    created: int
    updated: int
    total_activities: int


class ActivityResponse(CamelModel):
    """Synced activity response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    strava_activity_id: int
    activity_type: str
    activity_name: str | None
    distance: float | None
    distance_unit: str
    duration: int | None
    start_date: datetime
    average_speed: float | None
    max_speed: float | None
    average_heart_rate: float | None
    max_heart_rate: float | None
    average_power: float | None
    max_power: float | None
    calories: int | None
    elevation_gain: float | None
    description: str | None
    synced_at: datetime


class ActivityListResponse(CamelModel):
    """A page of activities."""

    activities: list[ActivityResponse]
    page: int
    limit: int
    total: int
