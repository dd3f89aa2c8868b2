"""
Celery configuration for background task processing.
"""
from celery import Celery

from tilltrack.core.config import settings

# Create Celery app
celery = Celery(
    "tilltrack",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["tilltrack.worker.tasks"]
)

# Celery configuration
celery.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone=settings.store_timezone or "UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=30 * 60,  # 30 minutes
    task_soft_time_limit=25 * 60,  # 25 minutes
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=1000,
    result_expires=3600,  # 1 hour
    beat_schedule={
        "generate-daily-report": {
            "task": "tilltrack.worker.tasks.generate_daily_report",
            "schedule": 86400.0,  # Every 24 hours
        },
        "check-stock-levels": {
            "task": "tilltrack.worker.tasks.check_stock_levels",
            "schedule": 1800.0,  # Every 30 minutes
        }
    }
)

if __name__ == "__main__":
    celery.start()
