"""SQLAlchemy models."""

from src.models.custom_supplement import CustomSupplement
from src.models.intake_log import IntakeLogEntry
from src.models.pantry import PantryItem
from src.models.strava import StravaConnection, SyncedActivity
from src.models.user import User

__all__ = [
    "User",
    "PantryItem",
    "CustomSupplement",
    "IntakeLogEntry",
    "StravaConnection",
    "SyncedActivity",
]
