from __future__ import annotations

from uuid import uuid4

import pytest

from apps.reviews.models import Review
from apps.reviews.rating import RatingSummary, recompute_average, summarize
from shared.domain.exceptions import NotFoundError, ValidationError


@pytest.mark.parametrize(
    "total,count,expected",
    [
        (0, 0, RatingSummary(0.0, 0)),
        (12, 3, RatingSummary(4.0, 3)),
        (9, 2, RatingSummary(4.5, 2)),
        (13, 3, RatingSummary(4.3, 3)),
        (14, 3, RatingSummary(4.7, 3)),
        # 4.25 rounds half-up
        (17, 4, RatingSummary(4.3, 4)),
        (5, 1, RatingSummary(5.0, 1)),
    ],
)
def test_summarize_rounds_half_up_to_one_decimal(total, count, expected):
    assert summarize(total, count) == expected


@pytest.mark.django_db
def test_recompute_writes_aggregate_on_attraction(attraction, tourist, other_tourist):
    Review.objects.create(author=tourist, target_id=attraction.id, target_kind="Attraction", rating=2)
    Review.objects.create(author=other_tourist, target_id=attraction.id, target_kind="Attraction", rating=5)

    summary = recompute_average(attraction.id, "Attraction")

    attraction.refresh_from_db()
    assert summary == RatingSummary(3.5, 2)
    assert (attraction.average_rating, attraction.review_count) == (3.5, 2)


@pytest.mark.django_db
def test_recompute_resets_to_zero_without_reviews(service):
    service.average_rating, service.review_count = 4.2, 7
    service.save()

    summary = recompute_average(service.id, "Service")

    service.refresh_from_db()
    assert summary == RatingSummary(0.0, 0)
    assert (service.average_rating, service.review_count) == (0.0, 0)


@pytest.mark.django_db
def test_recompute_unknown_kind_or_target():
    with pytest.raises(ValidationError):
        recompute_average(uuid4(), "Hotel")
    with pytest.raises(NotFoundError):
        recompute_average(uuid4(), "Service")
