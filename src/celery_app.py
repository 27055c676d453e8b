"""Celery application configuration."""

from celery import Celery

from src.config import get_settings

settings = get_settings()

app = Celery(
    "supplement_tracker",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["src.tasks.strava_sync"],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=300,  # 5 minutes max per task
    task_soft_time_limit=240,  # 4 minutes soft limit
    beat_schedule={
        "sync-all-strava-connections": {
            "task": "src.tasks.strava_sync.sync_all_connections",
            "schedule": settings.strava_sync_interval_minutes * 60,
        },
    },
)
