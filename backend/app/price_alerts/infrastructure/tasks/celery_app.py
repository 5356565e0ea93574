"""Celery application configuration."""

from celery import Celery
from celery.schedules import crontab
from celery.signals import setup_logging as celery_setup_logging

from app.core.config import get_settings
from app.core.logging import level_for, setup_logging

settings = get_settings()

celery_app = Celery(
    "price_alerts",
    broker=str(settings.celery_broker_url),
    backend=str(settings.celery_result_backend),
    include=["app.price_alerts.infrastructure.tasks.alert_tasks"],
)

# Celery configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=300,  # 5 minutes max per pass
    worker_prefetch_multiplier=1,  # Fair task distribution
    # Beat schedule for periodic tasks
    beat_schedule={
        "check-stock-alerts": {
            "task": "app.price_alerts.infrastructure.tasks.alert_tasks.check_stock_alerts",
            "schedule": crontab(minute=f"*/{settings.alert_check_interval_minutes}"),
        },
    },
)


@celery_setup_logging.connect
def _configure_worker_logging(**kwargs) -> None:
    """Use the application log format in workers instead of Celery's."""
    setup_logging(level=level_for(settings.debug))

