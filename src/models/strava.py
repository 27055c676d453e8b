"""Strava connection and synced activity models."""

from datetime import UTC, datetime

from sqlalchemy import JSON, BigInteger, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base


class StravaConnection(Base):
    """OAuth credentials linking a user to their Strava athlete account."""

    __tablename__ = "strava_connections"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    strava_id = Column(BigInteger, unique=True, nullable=False)  # Strava athlete id
    access_token = Column(String(255), nullable=False)
    refresh_token = Column(String(255), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    athlete_data = Column(JSON, nullable=True)  # Snapshot of the athlete profile
    connected_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )
    last_sync_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User", backref="strava_connections")

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the access token has passed its expiry time."""
        now = now or datetime.now(UTC)
        expires_at = self.expires_at
        # SQLite hands back naive datetimes; they are stored in UTC
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return expires_at <= now


class SyncedActivity(Base):
    """Activity pulled from Strava, unique by the Strava activity id."""

    __tablename__ = "user_activities"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    strava_activity_id = Column(BigInteger, unique=True, nullable=False)
    activity_type = Column(String(50), nullable=False, index=True)
    activity_name = Column(String(255), nullable=True)
    distance = Column(Float, nullable=True)
    distance_unit = Column(String(20), nullable=False, default="meters")
    duration = Column(Integer, nullable=True)  # Moving time in seconds
    start_date = Column(DateTime(timezone=True), nullable=False, index=True)
    average_speed = Column(Float, nullable=True)
    max_speed = Column(Float, nullable=True)
    average_heart_rate = Column(Float, nullable=True)
    max_heart_rate = Column(Float, nullable=True)
    average_power = Column(Float, nullable=True)
    max_power = Column(Float, nullable=True)
    calories = Column(Integer, nullable=True)
    elevation_gain = Column(Float, nullable=True)
    description = Column(Text, nullable=True)
    raw_data = Column(JSON, nullable=True)  # Full Strava payload
    synced_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    user = relationship("User", backref="activities")
