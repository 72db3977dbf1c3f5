"""Booking persistence model for TourisMe Luxor.

Business rules live on the ``apps.bookings.domain`` aggregate; this model
is its storage shape and is written through ``DjangoBookingRepository``.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.domain.entities import BookingStatus


class Booking(models.Model):
    """A tourist's reservation of a catalog service."""

    class Status(models.TextChoices):
        PENDING = BookingStatus.PENDING.value, _("Pending")
        CONFIRMED = BookingStatus.CONFIRMED.value, _("Confirmed")
        CANCELLED = BookingStatus.CANCELLED.value, _("Cancelled")
        COMPLETED = BookingStatus.COMPLETED.value, _("Completed")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tourist = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    service = models.ForeignKey(
        "catalog.Service",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    service_date = models.DateTimeField()
    number_of_people = models.PositiveSmallIntegerField(default=1)
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default="USD")
    special_requests = models.TextField(blank=True)
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
    )
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["tourist", "-created_at"], name="bookings_tourist_idx"),
            models.Index(fields=["service", "service_date"], name="bookings_service_date_idx"),
            models.Index(fields=["status"], name="bookings_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking {self.id} for {self.service_id} ({self.status})"
