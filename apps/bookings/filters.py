"""FilterSet for booking listings."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    """Status and service-date window filters used by the booking list."""

    status = django_filters.ChoiceFilter(field_name="status", choices=Booking.Status.choices)
    service = django_filters.UUIDFilter(field_name="service_id", lookup_expr="exact")
    date_from = django_filters.IsoDateTimeFilter(field_name="service_date", lookup_expr="gte")
    date_to = django_filters.IsoDateTimeFilter(field_name="service_date", lookup_expr="lte")

    class Meta:
        model = Booking
        fields = ["status", "service"]
