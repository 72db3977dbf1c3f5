"""Notification services: the sink that stores and emails notifications,
and the read-state operations recipients use."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from django.conf import settings  # type: ignore
from django.db import DatabaseError  # type: ignore
from django.db.models import Q  # type: ignore
from django.utils import timezone  # type: ignore

from shared.domain.exceptions import (
    AuthorizationError,
    NotFoundError,
    NotificationPersistenceError,
    ValidationError,
)

from .catalog import EmailPayload, Recipient, render
from .email import DjangoEmailDispatcher
from .models import Notification

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchOptions:
    related_entity_id: Optional[UUID] = None
    related_entity_kind: str = ""
    action_url: str = ""
    priority: str = Notification.Priority.MEDIUM
    send_email: bool = True
    email: Optional[EmailPayload] = None


class NotificationSink:
    """
    Persists one in-app notification per call and optionally emails it.

    A storage failure raises ``NotificationPersistenceError``. Email is
    best effort: a refused or failing send is logged and the stored
    notification stays.
    """

    def __init__(self, email_dispatcher=None):
        self.email_dispatcher = email_dispatcher or DjangoEmailDispatcher()

    def dispatch(
        self,
        recipient_user_id: int,
        category: str,
        title: str,
        message: str,
        options: DispatchOptions | None = None,
    ) -> Notification:
        options = options or DispatchOptions()
        if category not in Notification.Category.values:
            raise ValidationError(f"Unknown notification category: {category!r}")

        try:
            notification = Notification.objects.create(
                recipient_id=recipient_user_id,
                category=category,
                title=title,
                message=message,
                related_entity_id=options.related_entity_id,
                related_entity_kind=options.related_entity_kind,
                action_url=options.action_url,
                priority=options.priority,
            )
        except DatabaseError as exc:
            logger.error(f"Failed to store notification for user {recipient_user_id}: {title}", exc_info=True)
            raise NotificationPersistenceError("Failed to create notification") from exc

        logger.info(f"Notification {notification.pk} ({category}) stored for user {recipient_user_id}")

        if options.send_email and options.email is not None:
            self._send_email(options.email)
        return notification

    def notify(self, event, recipient: Recipient) -> Notification:
        """Render a catalog event for ``recipient`` and dispatch it"""
        rendered = render(event, recipient)
        return self.dispatch(
            recipient.user_id,
            rendered.category,
            rendered.title,
            rendered.message,
            DispatchOptions(
                related_entity_id=rendered.related_entity_id,
                related_entity_kind=rendered.related_entity_kind,
                action_url=rendered.action_url,
                priority=rendered.priority,
                send_email=rendered.email is not None,
                email=rendered.email,
            ),
        )

    def _send_email(self, email: EmailPayload):
        try:
            sent = self.email_dispatcher.send(email.to, email.subject, email.html)
        except Exception:
            logger.error(f"Email dispatcher raised for {email.to}: {email.subject}", exc_info=True)
            return
        if not sent:
            logger.warning(f"Email to {email.to} was not sent: {email.subject}")


# ============================================================================
# READ STATE
# ============================================================================

def _owned_notification(notification_id, user_id: int) -> Notification:
    notification = Notification.objects.filter(pk=notification_id).first()
    if notification is None:
        raise NotFoundError("Notification not found")
    if notification.recipient_id != user_id:
        raise AuthorizationError("Not authorized")
    return notification


def unread_count(user_id: int) -> int:
    return Notification.objects.filter(recipient_id=user_id, is_read=False).count()


def mark_as_read(notification_id, user_id: int, *, now: datetime | None = None) -> Notification:
    """Mark one notification read. Already-read notifications keep their read_at."""
    notification = _owned_notification(notification_id, user_id)
    if not notification.is_read:
        notification.is_read = True
        notification.read_at = now or timezone.now()
        notification.save(update_fields=["is_read", "read_at"])
    return notification


def mark_all_as_read(user_id: int, *, now: datetime | None = None) -> int:
    updated = Notification.objects.filter(recipient_id=user_id, is_read=False).update(
        is_read=True,
        read_at=now or timezone.now(),
    )
    logger.info(f"Marked {updated} notifications read for user {user_id}")
    return updated


def delete_notification(notification_id, user_id: int) -> None:
    _owned_notification(notification_id, user_id).delete()


def clear_read(user_id: int) -> int:
    deleted, _ = Notification.objects.filter(recipient_id=user_id, is_read=True).delete()
    return deleted


def purge_expired_read_notifications(now: datetime | None = None) -> int:
    """Delete notifications read longer ago than the retention window.

    Rows flagged read without a ``read_at`` fall back to ``created_at``.
    """
    days = getattr(settings, "NOTIFICATION_READ_RETENTION_DAYS", 30)
    cutoff = (now or timezone.now()) - timedelta(days=days)
    expired = Q(read_at__lt=cutoff) | Q(read_at__isnull=True, created_at__lt=cutoff)
    deleted, _ = Notification.objects.filter(expired, is_read=True).delete()
    logger.info(f"Purged {deleted} notifications read before {cutoff.isoformat()}")
    return deleted
