"""Celery tasks for background Strava activity sync."""

import asyncio
import logging

from sqlalchemy.orm import Session

from src.celery_app import app as celery_app
from src.database import SessionLocal
from src.models.strava import StravaConnection
from src.services.errors import ServiceError
from src.services.strava_service import StravaService

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=2)
def sync_user_activities(self, user_id: int) -> dict:
    """Sync one user's Strava activities in the background.

    Args:
        user_id: ID of the user whose connection should be synced

    Returns:
        dict with the sync counts, or the error message when the sync failed
    """
    db: Session = SessionLocal()
    try:
        service = StravaService(db)
        result = asyncio.run(service.sync_activities(user_id))
        logger.info(f"Background Strava sync for user {user_id}: {result}")
        return {"status": "completed", **result}
    except ServiceError as e:
        # Expired refresh tokens and missing connections will not fix themselves
        logger.warning(f"Background Strava sync for user {user_id} failed: {e.message}")
        return {"status": "failed", "error": e.message}
    except Exception as e:
        logger.error(f"Error in sync_user_activities for user {user_id}: {e}", exc_info=True)
        db.rollback()

        if self.request.retries < self.max_retries:
            raise self.retry(exc=e, countdown=60)

        return {"status": "failed", "error": str(e)}
    finally:
        db.close()


@celery_app.task
def sync_all_connections() -> dict:
    """Queue a sync for every connected user."""
    db: Session = SessionLocal()
    try:
        user_ids = [
            user_id for (user_id,) in db.query(StravaConnection.user_id).distinct().all()
        ]
    finally:
        db.close()

    for user_id in user_ids:
        sync_user_activities.delay(user_id)

    logger.info(f"Queued Strava sync for {len(user_ids)} connection(s)")
    return {"queued": len(user_ids)}
