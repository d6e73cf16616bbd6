"""
Celery application configuration and setup.
"""

from celery import Celery
from celery.schedules import crontab

from src.config.settings import settings

celery_app = Celery(
    "repair_service",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["src.background.tasks.reminders"],
)

celery_app.conf.update(
    # Task routing
    task_routes={
        "send_appointment_reminders_task": {"queue": "notifications"},
    },
    # Worker configuration
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=100,
    worker_hijack_root_logger=False,
    # Task configuration
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    result_expires=3600,
    # Beat runs in the same timezone appointments are booked in.
    timezone=settings.SCHEDULING_TIMEZONE,
    enable_utc=True,
    task_default_queue="default",
    # Beat scheduler configuration
    beat_schedule={
        # Remind tomorrow's customers once a day
        "send-appointment-reminders": {
            "task": "send_appointment_reminders_task",
            "schedule": crontab(minute=0, hour=settings.REMINDER_SEND_HOUR),
            "options": {"queue": "notifications"},
        },
    },
    # Task time limits
    task_soft_time_limit=settings.CELERY_TASK_SOFT_TIME_LIMIT,
    task_time_limit=settings.CELERY_TASK_TIME_LIMIT,
    task_acks_late=False,
    # Monitoring
    worker_send_task_events=True,
    task_send_sent_event=True,
)

if __name__ == "__main__":
    celery_app.start()
