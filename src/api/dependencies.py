"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.user import User
from src.services.auth import decode_user_id, get_user
from src.services.catalog import ProductCatalog, get_catalog
from src.services.duplicate_detector import DuplicateDetector
from src.services.errors import AuthenticationError
from src.services.pantry_service import PantryService
from src.services.strava_client import StravaClient, get_strava_client
from src.services.strava_service import StravaService
from src.services.tracking_service import TrackingService

# auto_error=False so a missing header goes through our own 401 handling
security = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> int:
    """Get the authenticated user id from the bearer token.

    The user row is not loaded; services scope their queries by this id.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("No token provided")
    return decode_user_id(credentials.credentials)


def get_current_user(
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Load the authenticated user, raising NotFoundError if the row is gone."""
    return get_user(db, user_id)


def get_pantry_service(
    db: Annotated[Session, Depends(get_db)],
) -> PantryService:
    """Get pantry service with dependencies."""
    return PantryService(db)


def get_tracking_service(
    db: Annotated[Session, Depends(get_db)],
) -> TrackingService:
    """Get intake tracking service with dependencies."""
    return TrackingService(db)


def get_duplicate_detector(
    db: Annotated[Session, Depends(get_db)],
    catalog: Annotated[ProductCatalog, Depends(get_catalog)],
) -> DuplicateDetector:
    """Get duplicate detector over the catalog and the store."""
    return DuplicateDetector(db, catalog)


def get_strava_service(
    db: Annotated[Session, Depends(get_db)],
    client: Annotated[StravaClient, Depends(get_strava_client)],
) -> StravaService:
    """Get Strava service with dependencies."""
    return StravaService(db, client)
