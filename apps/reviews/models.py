"""Models for the review domain.

Defines the ``Review`` entity: a rating from 1 to 5 and an optional
comment left by a user on a service or an attraction. One user can leave
at most one review per target.
"""

from __future__ import annotations

import uuid

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Review(models.Model):
    """Represents a review left by a user for a service or an attraction."""

    class TargetKind(models.TextChoices):
        ATTRACTION = "Attraction", _("Attraction")
        SERVICE = "Service", _("Service")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='reviews'
    )
    target_id = models.UUIDField(db_index=True)
    target_kind = models.CharField(max_length=16, choices=TargetKind.choices)
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text=_('Rating from 1 to 5')
    )
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['author', 'target_id'], name='reviews_unique_author_target'),
            models.CheckConstraint(
                condition=models.Q(rating__gte=1) & models.Q(rating__lte=5),
                name='reviews_rating_range',
            ),
        ]
        indexes = [
            models.Index(fields=['target_id', '-created_at'], name='reviews_target_idx'),
        ]

    def __str__(self) -> str:
        return f"Review by {self.author_id} for {self.target_kind} {self.target_id} (Rating: {self.rating})"
