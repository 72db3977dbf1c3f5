import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("tourisme_luxor")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Purge read notifications past the retention window - daily at 03:30
    "purge-read-notifications": {
        "task": "notifications.purge_read_notifications",
        "schedule": crontab(minute=30, hour=3),
    },
}

app.conf.timezone = "Africa/Cairo"
