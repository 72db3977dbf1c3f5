"""Read-side queries over bookings."""

from __future__ import annotations

from decimal import Decimal

from django.db.models import Count, Q, Sum  # type: ignore

from shared.domain.actors import Actor, Administrator, ServiceOwner
from shared.domain.exceptions import AuthorizationError

from .domain.entities import BookingStatus
from .models import Booking

REVENUE_STATUSES = (BookingStatus.CONFIRMED.value, BookingStatus.COMPLETED.value)


def bookings_visible_to(actor: Actor):
    """Role-scoped booking queryset."""
    qs = Booking.objects.select_related("service", "tourist")
    if isinstance(actor, Administrator):
        return qs
    if isinstance(actor, ServiceOwner):
        return qs.filter(service__owner_id=actor.user_id)
    return qs.filter(tourist_id=actor.user_id)


def booking_stats(actor: Actor) -> dict:
    """Counts and revenue per status for an owner's services, or for the platform."""
    if not isinstance(actor, (ServiceOwner, Administrator)):
        raise AuthorizationError("Only business owners and administrators can view booking statistics")

    qs = bookings_visible_to(actor)
    rows = qs.values("status").annotate(count=Count("id"), revenue=Sum("total_price"))

    by_status = {
        status.value: {"count": 0, "revenue": Decimal("0.00")}
        for status in BookingStatus
    }
    for row in rows:
        by_status[row["status"]] = {
            "count": row["count"],
            "revenue": row["revenue"] or Decimal("0.00"),
        }

    revenue = qs.filter(Q(status__in=REVENUE_STATUSES)).aggregate(total=Sum("total_price"))["total"]
    return {
        "total_bookings": sum(entry["count"] for entry in by_status.values()),
        "by_status": by_status,
        "total_revenue": revenue or Decimal("0.00"),
    }
