"""Strava connection lifecycle and activity sync."""

import logging
from datetime import UTC, datetime
from typing import Any

import httpx
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.strava import StravaConnection, SyncedActivity
from src.services.auth import create_oauth_state, decode_oauth_state, get_user
from src.services.errors import NotFoundError, UpstreamError, ValidationError
from src.services.strava_client import StravaClient

logger = logging.getLogger(__name__)

# Strava returns at most 200 activities per page
SYNC_PAGE_SIZE = 200


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value).astimezone(UTC)


def _activity_fields(activity: dict[str, Any]) -> dict[str, Any]:
    """Map a Strava activity payload onto SyncedActivity columns."""
    return {
        "activity_type": activity.get("type") or activity.get("sport_type") or "Unknown",
        "activity_name": activity.get("name"),
        "distance": activity.get("distance"),
        "distance_unit": "meters",
        "duration": activity.get("moving_time"),
        "start_date": _parse_timestamp(activity.get("start_date")),
        "average_speed": activity.get("average_speed"),
        "max_speed": activity.get("max_speed"),
        "average_heart_rate": activity.get("average_heartrate"),
        "max_heart_rate": activity.get("max_heartrate"),
        "average_power": activity.get("average_watts"),
        "max_power": activity.get("max_watts"),
        "calories": activity.get("calories"),
        "elevation_gain": activity.get("total_elevation_gain"),
        "description": activity.get("description"),
        "raw_data": activity,
    }


class StravaService:
    """Connect, refresh, sync and disconnect a user's Strava account."""

    def __init__(self, db: Session, client: StravaClient | None = None):
        self.db = db
        self.client = client or StravaClient()

    def get_connection(self, user_id: int) -> StravaConnection | None:
        """Get the user's Strava connection, if any."""
        return (
            self.db.query(StravaConnection)
            .filter(StravaConnection.user_id == user_id)
            .order_by(StravaConnection.connected_at.desc())
            .first()
        )

    def authorization_url(self, user_id: int) -> str:
        """Build the Strava authorization URL with a signed state for this user."""
        return self.client.authorization_url(create_oauth_state(user_id))

    async def complete_authorization(self, code: str, state: str) -> StravaConnection:
        """Handle the OAuth callback: exchange the code and store the connection.

        The connection is keyed by the Strava athlete id; if the athlete is not
        known yet, the user's existing connection (if any) is re-pointed at it.
        """
        if not code or not state:
            raise ValidationError("Missing authorization code or state")

        user_id = decode_oauth_state(state)
        get_user(self.db, user_id)

        try:
            token_data = await self.client.exchange_code(code)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Strava code exchange failed for user {user_id}: {e}")
            raise UpstreamError("Error exchanging Strava authorization code") from e

        try:
            athlete = token_data["athlete"]
            strava_id = int(athlete["id"])
            connection = self._store_connection(user_id, strava_id, athlete, token_data)
        except (KeyError, TypeError, ValueError) as e:
            self.db.rollback()
            logger.error(f"Unusable Strava token response for user {user_id}: {e!r}")
            raise UpstreamError("Strava token response was incomplete") from e
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Could not store Strava connection for user {user_id}: {e}")
            raise UpstreamError("Error saving Strava connection") from e

        logger.info(f"Connected Strava athlete {strava_id} to user {user_id}")
        return connection

    def _store_connection(
        self,
        user_id: int,
        strava_id: int,
        athlete: dict[str, Any],
        token_data: dict[str, Any],
    ) -> StravaConnection:
        """Upsert the connection for an athlete and drop any other row the user has."""
        connection = (
            self.db.query(StravaConnection).filter(StravaConnection.strava_id == strava_id).first()
        ) or self.get_connection(user_id)

        if connection is None:
            connection = StravaConnection(user_id=user_id, strava_id=strava_id)
            self.db.add(connection)

        connection.user_id = user_id
        connection.strava_id = strava_id
        connection.athlete_data = athlete
        connection.connected_at = datetime.now(UTC)
        self._apply_tokens(connection, token_data)
        self.db.flush()

        # One connection per user: drop any row left over from a previous athlete
        self.db.query(StravaConnection).filter(
            StravaConnection.user_id == user_id,
            StravaConnection.id != connection.id,
        ).delete(synchronize_session=False)

        self.db.commit()
        self.db.refresh(connection)
        return connection

    def status(self, user_id: int) -> dict[str, Any]:
        """Report whether the user is connected and whether the token has expired."""
        connection = self.get_connection(user_id)
        if connection is None:
            return {"connected": False}

        return {
            "connected": True,
            "expired": connection.is_expired(),
            "athlete_data": connection.athlete_data,
            "last_sync": connection.last_sync_at,
        }

    async def ensure_fresh_token(self, connection: StravaConnection) -> str:
        """Return a usable access token, refreshing it first if it has expired.

        A failed refresh leaves the stored credentials untouched.
        """
        if not connection.is_expired():
            return connection.access_token

        try:
            token_data = await self.client.refresh_access_token(connection.refresh_token)
            self._apply_tokens(connection, token_data)
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Strava token refresh failed for user {connection.user_id}: {e!r}")
            raise UpstreamError("Error refreshing Strava token") from e

        self.db.commit()
        logger.info(f"Refreshed Strava token for user {connection.user_id}")
        return connection.access_token

    async def sync_activities(self, user_id: int) -> dict[str, int]:
        """Pull recent activities from Strava and upsert them by activity id.

        Returns:
            {"synced_count": rows written, "created": int, "updated": int,
             "total_activities": activities returned by Strava}
        """
        connection = self.get_connection(user_id)
        if connection is None:
            raise ValidationError("No Strava connection found")

        access_token = await self.ensure_fresh_token(connection)

        try:
            activities = await self.client.list_activities(
                access_token, page=1, per_page=SYNC_PAGE_SIZE
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Strava activities fetch failed for user {user_id}: {e}")
            raise UpstreamError("Error fetching activities from Strava") from e

        created = 0
        updated = 0
        for activity in activities:
            result = self._upsert_activity(user_id, activity)
            if result == "created":
                created += 1
            elif result == "updated":
                updated += 1

        connection.last_sync_at = datetime.now(UTC)
        self.db.commit()

        logger.info(
            f"Strava sync for user {user_id}: {created} created, {updated} updated, "
            f"{len(activities)} fetched"
        )
        return {
            "synced_count": created + updated,
            "created": created,
            "updated": updated,
            "total_activities": len(activities),
        }

    def disconnect(self, user_id: int) -> None:
        """Forget the user's Strava credentials; synced activities are kept."""
        deleted = (
            self.db.query(StravaConnection)
            .filter(StravaConnection.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if deleted == 0:
            raise NotFoundError("No Strava connection found")
        logger.info(f"Disconnected Strava for user {user_id}")

    def list_activities(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 50,
        activity_type: str | None = None,
    ) -> tuple[list[SyncedActivity], int]:
        """Page through a user's synced activities, newest first.

        Returns the page of activities and the total number matching the filter.
        """
        query = self.db.query(SyncedActivity).filter(SyncedActivity.user_id == user_id)
        if activity_type:
            query = query.filter(SyncedActivity.activity_type == activity_type)

        total = query.count()
        activities = (
            query.order_by(SyncedActivity.start_date.desc(), SyncedActivity.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return activities, total

    def _apply_tokens(self, connection: StravaConnection, token_data: dict[str, Any]) -> None:
        # Read every field before assigning so a bad payload changes nothing
        access_token = token_data["access_token"]
        refresh_token = token_data["refresh_token"]
        expires_at = datetime.fromtimestamp(token_data["expires_at"], UTC)

        connection.access_token = access_token
        connection.refresh_token = refresh_token
        connection.expires_at = expires_at

    def _upsert_activity(self, user_id: int, activity: dict[str, Any]) -> str | None:
        """Insert or update one activity.

        Returns "created", "updated", or None when the payload was skipped.
        """
        strava_activity_id = activity.get("id")
        fields = _activity_fields(activity)
        if strava_activity_id is None or fields["start_date"] is None:
            logger.warning(f"Skipping Strava activity without id or start date: {activity}")
            return None

        existing = (
            self.db.query(SyncedActivity)
            .filter(SyncedActivity.strava_activity_id == strava_activity_id)
            .first()
        )

        if existing and existing.user_id != user_id:
            logger.warning(
                f"Strava activity {strava_activity_id} already belongs to user "
                f"{existing.user_id}, skipping for user {user_id}"
            )
            return None

        if existing:
            for column, value in fields.items():
                setattr(existing, column, value)
            existing.synced_at = datetime.now(UTC)
            self.db.flush()
            return "updated"

        self.db.add(
            SyncedActivity(user_id=user_id, strava_activity_id=strava_activity_id, **fields)
        )
        self.db.flush()
        return "created"
