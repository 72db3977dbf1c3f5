"""FilterSet for review listings."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Review


class ReviewFilterSet(django_filters.FilterSet):
    """Target, star rating and sort order used by the review list."""

    target = django_filters.UUIDFilter(field_name="target_id", lookup_expr="exact")
    rating = django_filters.NumberFilter(field_name="rating", lookup_expr="exact")
    sort = django_filters.OrderingFilter(
        fields=(
            ("created_at", "createdAt"),
            ("rating", "rating"),
        ),
    )

    class Meta:
        model = Review
        fields = ["target", "rating"]
