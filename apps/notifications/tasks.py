"""Celery tasks for notifications."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from .services import purge_expired_read_notifications

logger = logging.getLogger(__name__)


@shared_task(name="notifications.purge_read_notifications")
def purge_read_notifications() -> int:
    """Periodic retention purge of read notifications."""
    deleted = purge_expired_read_notifications()
    logger.info(f"Retention purge removed {deleted} notifications")
    return deleted
