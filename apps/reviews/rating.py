"""
Rating aggregation

``average_rating`` and ``review_count`` on a Service or an Attraction are
derived from the reviews pointing at it. ``recompute_average`` is the only
writer of those columns. It locks the target row first, so concurrent
review writes on one target are applied one after the other and the last
recompute always sees every committed review.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from django.db import transaction  # type: ignore
from django.db.models import Count, Sum  # type: ignore

from apps.catalog.models import Attraction, Service
from shared.domain.exceptions import NotFoundError, ValidationError
from shared.infrastructure.locking import lock_queryset_if_possible

from .models import Review

logger = logging.getLogger(__name__)

TARGET_MODELS = {
    Review.TargetKind.ATTRACTION.value: Attraction,
    Review.TargetKind.SERVICE.value: Service,
}

ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True)
class RatingSummary:
    average: float
    count: int


def summarize(total: int, count: int) -> RatingSummary:
    """Mean rounded half-up to one decimal; 0 for no reviews."""
    if not count:
        return RatingSummary(average=0.0, count=0)
    mean = (Decimal(total) / Decimal(count)).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)
    return RatingSummary(average=float(mean), count=count)


def as_target_id(value) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid target ID: {value!r}") from None


def target_model(target_kind: str):
    try:
        return TARGET_MODELS[target_kind]
    except (KeyError, TypeError):
        raise ValidationError("Invalid target model. Must be Attraction or Service.") from None


def lock_target(target_id, target_kind: str):
    """Load the target row, locked for the rest of the current transaction."""
    model = target_model(target_kind)
    target = lock_queryset_if_possible(model.objects.filter(pk=as_target_id(target_id))).first()
    if target is None:
        raise NotFoundError(f"{target_kind} not found")
    return target


def recompute_average(target_id, target_kind: str) -> RatingSummary:
    """Recompute and store the rating aggregate of one target."""
    target_id = as_target_id(target_id)
    model = target_model(target_kind)

    with transaction.atomic():
        lock_target(target_id, target_kind)
        totals = Review.objects.filter(target_id=target_id).aggregate(
            total=Sum("rating"),
            count=Count("id"),
        )
        summary = summarize(totals["total"] or 0, totals["count"])
        model.objects.filter(pk=target_id).update(
            average_rating=summary.average,
            review_count=summary.count,
        )

    logger.info(
        f"{target_kind} {target_id} rating recomputed: "
        f"{summary.average} over {summary.count} reviews"
    )
    return summary
