"""Background Strava sync task tests."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.models.strava import StravaConnection
from src.services.errors import ValidationError
from src.tasks.strava_sync import sync_all_connections, sync_user_activities


def _service(**kwargs):
    service = MagicMock()
    service.sync_activities = AsyncMock(**kwargs)
    return service


def test_sync_user_activities_reports_counts():
    """Test a successful background sync returns the counts."""
    counts = {"synced_count": 2, "created": 1, "updated": 1, "total_activities": 2}
    session = MagicMock()
    service = _service(return_value=counts)

    with (
        patch("src.tasks.strava_sync.SessionLocal", return_value=session),
        patch("src.tasks.strava_sync.StravaService", return_value=service),
    ):
        result = sync_user_activities(7)

    assert result == {"status": "completed", **counts}
    service.sync_activities.assert_awaited_once_with(7)
    session.close.assert_called_once()


def test_sync_user_activities_service_error():
    """Test domain errors end the task without retrying."""
    session = MagicMock()
    service = _service(side_effect=ValidationError("No Strava connection found"))

    with (
        patch("src.tasks.strava_sync.SessionLocal", return_value=session),
        patch("src.tasks.strava_sync.StravaService", return_value=service),
    ):
        result = sync_user_activities(7)

    assert result == {"status": "failed", "error": "No Strava connection found"}
    session.rollback.assert_not_called()
    session.close.assert_called_once()


def test_sync_user_activities_unexpected_error_is_retried():
    """Test unexpected errors roll back and go through the retry path."""
    session = MagicMock()
    service = _service(side_effect=RuntimeError("connection reset"))

    with (
        patch("src.tasks.strava_sync.SessionLocal", return_value=session),
        patch("src.tasks.strava_sync.StravaService", return_value=service),
        pytest.raises(RuntimeError),
    ):
        # Called directly (not by a worker), retry re-raises the original error
        sync_user_activities(7)

    session.rollback.assert_called_once()
    session.close.assert_called_once()


def test_sync_all_connections_queues_each_user(db, auth_headers, other_auth_headers):
    """Test every connected user gets one sync task."""
    for user_id, strava_id in [(auth_headers.user_id, 1), (other_auth_headers.user_id, 2)]:
        db.add(
            StravaConnection(
                user_id=user_id,
                strava_id=strava_id,
                access_token="a",
                refresh_token="r",
                expires_at=datetime.now(UTC) + timedelta(hours=1),
            )
        )
    db.commit()

    with (
        patch("src.tasks.strava_sync.SessionLocal", return_value=db),
        patch("src.tasks.strava_sync.sync_user_activities.delay") as mock_delay,
    ):
        result = sync_all_connections()

    assert result == {"queued": 2}
    queued = sorted(call.args[0] for call in mock_delay.call_args_list)
    assert queued == sorted([auth_headers.user_id, other_auth_headers.user_id])


def test_sync_all_connections_nothing_connected(db):
    """Test no tasks are queued when nobody is connected."""
    with (
        patch("src.tasks.strava_sync.SessionLocal", return_value=db),
        patch("src.tasks.strava_sync.sync_user_activities.delay") as mock_delay,
    ):
        result = sync_all_connections()

    assert result == {"queued": 0}
    mock_delay.assert_not_called()
