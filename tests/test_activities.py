"""Synced activity listing tests."""

from datetime import UTC, datetime, timedelta

from src.models.strava import SyncedActivity


def _seed(db, user_id, count, activity_type="Ride", first_id=1, start=None):
    start = start or datetime(2024, 3, 1, 7, 0, tzinfo=UTC)
    for offset in range(count):
        db.add(
            SyncedActivity(
                user_id=user_id,
                strava_activity_id=first_id + offset,
                activity_type=activity_type,
                activity_name=f"{activity_type} {offset}",
                distance=1000.0 * (offset + 1),
                duration=600 * (offset + 1),
                start_date=start + timedelta(days=offset),
            )
        )
    db.commit()


def test_list_activities_newest_first(client, auth_headers, db):
    """Test activities are ordered by start date, newest first."""
    _seed(db, auth_headers.user_id, 3)

    response = client.get("/api/activities", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert data["page"] == 1
    assert data["limit"] == 50
    assert [a["activityName"] for a in data["activities"]] == ["Ride 2", "Ride 1", "Ride 0"]
    assert data["activities"][0]["distanceUnit"] == "meters"
    assert data["activities"][0]["duration"] == 1800


def test_list_activities_pagination(client, auth_headers, db):
    """Test page and limit select a window while total counts everything."""
    _seed(db, auth_headers.user_id, 5)

    response = client.get("/api/activities?page=2&limit=2", headers=auth_headers)
    data = response.json()
    assert data["total"] == 5
    assert data["page"] == 2
    assert data["limit"] == 2
    assert [a["activityName"] for a in data["activities"]] == ["Ride 2", "Ride 1"]

    last = client.get("/api/activities?page=3&limit=2", headers=auth_headers).json()
    assert [a["activityName"] for a in last["activities"]] == ["Ride 0"]


def test_list_activities_filter_by_type(client, auth_headers, db):
    """Test filtering on activity type."""
    _seed(db, auth_headers.user_id, 2, activity_type="Ride", first_id=1)
    _seed(db, auth_headers.user_id, 3, activity_type="Run", first_id=100)

    data = client.get("/api/activities?activityType=Run", headers=auth_headers).json()
    assert data["total"] == 3
    assert {a["activityType"] for a in data["activities"]} == {"Run"}


def test_list_activities_scoped_to_user(client, auth_headers, other_auth_headers, db):
    """Test users only see their own activities."""
    _seed(db, other_auth_headers.user_id, 2)

    data = client.get("/api/activities", headers=auth_headers).json()
    assert data["total"] == 0
    assert data["activities"] == []


def test_list_activities_invalid_paging(client, auth_headers):
    """Test out-of-range paging parameters are rejected."""
    assert client.get("/api/activities?page=0", headers=auth_headers).status_code == 400
    assert client.get("/api/activities?limit=0", headers=auth_headers).status_code == 400
    assert client.get("/api/activities?limit=500", headers=auth_headers).status_code == 400


def test_list_activities_requires_auth(client):
    """Test the activity list needs a token."""
    assert client.get("/api/activities").status_code == 401
