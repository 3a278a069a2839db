"""Celery application configuration."""

import logging
from typing import Tuple

from celery import Celery
from celery.schedules import crontab

from devagenda.config import settings

logger = logging.getLogger(__name__)

celery_app = Celery(
    "devagenda",
    broker=settings.redis_url,
    backend=settings.redis_url,
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone=settings.timezone,
    enable_utc=True,
    task_track_started=True,
    task_time_limit=1800,
    task_soft_time_limit=1500,
    imports=("devagenda.worker.tasks",),
)


def parse_hhmm(value: str, default: Tuple[int, int]) -> Tuple[int, int]:
    """Parse an HH:MM setting, falling back to default when malformed."""
    try:
        hour, minute = map(int, value.split(":"))
    except (AttributeError, ValueError):
        logger.warning(f"Invalid HH:MM value '{value}', using {default[0]:02d}:{default[1]:02d}")
        return default
    if not (0 <= hour < 24 and 0 <= minute < 60):
        logger.warning(f"Out of range HH:MM value '{value}', using {default[0]:02d}:{default[1]:02d}")
        return default
    return hour, minute


sync_hour, sync_minute = parse_hhmm(settings.daily_sync_hhmm, (6, 0))
report_hour, report_minute = parse_hhmm(settings.weekly_report_hhmm, (7, 30))

# Celery Beat schedule (times are in settings.timezone)
celery_app.conf.beat_schedule = {
    "daily-sync": {
        "task": "devagenda.worker.tasks.sync_active_projects",
        "schedule": crontab(hour=sync_hour, minute=sync_minute),
    },
    "weekly-reports": {
        "task": "devagenda.worker.tasks.generate_weekly_reports",
        "schedule": crontab(hour=report_hour, minute=report_minute, day_of_week=1),  # Monday
    },
}
