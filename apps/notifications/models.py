"""Notification model.

Defines the in-app notification delivered to exactly one user. Rows are
created by ``NotificationSink`` in response to domain events (new
bookings, status changes, reviews) and consumed by the recipient, who can
mark them as read. Read state only ever moves from unread to read.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Notification(models.Model):
    """A message sent to a user about some event."""

    class Category(models.TextChoices):
        BOOKING_CREATED = "booking_created", _("Booking created")
        BOOKING_CONFIRMED = "booking_confirmed", _("Booking confirmed")
        BOOKING_CANCELLED = "booking_cancelled", _("Booking cancelled")
        BOOKING_COMPLETED = "booking_completed", _("Booking completed")
        REVIEW_RECEIVED = "review_received", _("Review received")
        AD_APPROVED = "ad_approved", _("Advertisement approved")
        AD_REJECTED = "ad_rejected", _("Advertisement rejected")
        TRIP_REMINDER = "trip_reminder", _("Trip reminder")
        SYSTEM_ANNOUNCEMENT = "system_announcement", _("System announcement")

    class Priority(models.TextChoices):
        LOW = "low", _("Low")
        MEDIUM = "medium", _("Medium")
        HIGH = "high", _("High")

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    category = models.CharField(max_length=32, choices=Category.choices)
    title = models.CharField(max_length=255)
    message = models.TextField()
    related_entity_id = models.UUIDField(null=True, blank=True)
    related_entity_kind = models.CharField(max_length=32, blank=True)
    action_url = models.CharField(max_length=255, blank=True)
    priority = models.CharField(
        max_length=8,
        choices=Priority.choices,
        default=Priority.MEDIUM,
    )
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["recipient", "is_read"], name="notifications_unread_idx"),
            models.Index(fields=["recipient", "-created_at"], name="notifications_recent_idx"),
        ]

    def __str__(self) -> str:
        return f"Notification to {self.recipient_id}: {self.title}"
