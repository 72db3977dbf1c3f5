"""Catalog models: services and attractions.

Both carry ``average_rating`` and ``review_count``. Those two columns are
derived from the reviews pointing at the row and are written only by
``apps.reviews.rating.recompute_average``.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class RatedTarget(models.Model):
    """Common columns of everything that can be reviewed."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    average_rating = models.FloatField(default=0, editable=False)
    review_count = models.PositiveIntegerField(default=0, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def __str__(self) -> str:
        return self.name


class Service(RatedTarget):
    """A bookable offer (restaurant table, rental, tour package)."""

    class ServiceType(models.TextChoices):
        RESTAURANT = "Restaurant", _("Restaurant")
        RENTAL = "Rental", _("Rental")
        TOUR_PACKAGE = "TourPackage", _("Tour package")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="services",
    )
    service_type = models.CharField(max_length=32, choices=ServiceType.choices)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Unit price per person."),
    )
    currency = models.CharField(max_length=3, default="USD")

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["owner"], name="catalog_service_owner_idx"),
            models.Index(fields=["service_type"], name="catalog_service_type_idx"),
        ]


class Attraction(RatedTarget):
    """A sight or venue tourists can review but not book."""

    category = models.CharField(max_length=100, blank=True, db_index=True)
    ticket_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    opening_hours = models.CharField(max_length=255, blank=True)

    class Meta:
        ordering = ["name"]
