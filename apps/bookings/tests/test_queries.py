from __future__ import annotations

from decimal import Decimal

import pytest

from apps.bookings.models import Booking
from apps.bookings.queries import booking_stats, bookings_visible_to
from shared.domain.actors import Administrator, ServiceOwner, Tourist
from shared.domain.exceptions import AuthorizationError

pytestmark = pytest.mark.django_db


@pytest.fixture
def bookings(tourist, other_tourist, service, other_service, service_date):
    rows = [
        (tourist, service, 2, "Pending"),
        (tourist, service, 1, "Confirmed"),
        (other_tourist, service, 3, "Completed"),
        (other_tourist, service, 1, "Cancelled"),
        (tourist, other_service, 4, "Confirmed"),
    ]
    return [
        Booking.objects.create(
            tourist=user,
            service=target,
            service_date=service_date,
            number_of_people=people,
            total_price=target.price * people,
            status=status,
        )
        for user, target, people, status in rows
    ]


def test_stats_for_service_owner_cover_only_their_services(bookings, owner, service):
    stats = booking_stats(ServiceOwner(owner.id, frozenset({service.id})))

    assert stats["total_bookings"] == 4
    assert stats["by_status"]["Pending"] == {"count": 1, "revenue": Decimal("200.00")}
    assert stats["by_status"]["Cancelled"]["count"] == 1
    # Confirmed 100 + Completed 300
    assert stats["total_revenue"] == Decimal("400.00")


def test_stats_for_administrator_cover_everything(bookings, admin_user):
    stats = booking_stats(Administrator(admin_user.id))

    assert stats["total_bookings"] == 5
    assert stats["total_revenue"] == Decimal("460.00")


def test_tourists_have_no_stats(tourist):
    with pytest.raises(AuthorizationError):
        booking_stats(Tourist(tourist.id))


def test_visibility_is_role_scoped(bookings, tourist, other_owner, admin_user):
    assert bookings_visible_to(Tourist(tourist.id)).count() == 3
    assert bookings_visible_to(ServiceOwner(other_owner.id)).count() == 1
    assert bookings_visible_to(Administrator(admin_user.id)).count() == 5
