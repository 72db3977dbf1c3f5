"""Django-backed repositories for the booking domain.

They translate between ORM rows and the ``Booking`` aggregate / the
``BookedService`` value object, and are the only code in the booking
context that issues queries.
"""

from __future__ import annotations

import logging
from uuid import UUID

from apps.bookings.domain.entities import BookedService, Booking, BookingStatus
from apps.bookings.models import Booking as BookingModel
from apps.catalog.models import Service
from shared.domain.value_objects import Money
from shared.infrastructure.locking import lock_queryset_if_possible

logger = logging.getLogger(__name__)


class DjangoBookingRepository:
    """Loads and stores Booking aggregates."""

    def get_by_id(self, booking_id: UUID, *, lock: bool = False) -> Booking | None:
        queryset = BookingModel.objects.filter(pk=booking_id)
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        row = queryset.first()
        return self._to_entity(row) if row else None

    def save(self, booking: Booking) -> None:
        BookingModel.objects.update_or_create(
            pk=booking.id,
            defaults={
                "tourist_id": booking.tourist_id,
                "service_id": booking.service_id,
                "service_date": booking.service_date,
                "number_of_people": booking.number_of_people,
                "total_price": booking.total_price.quantized(),
                "currency": booking.total_price.currency,
                "special_requests": booking.special_requests,
                "status": booking.status.value,
                "created_at": booking.created_at,
                "updated_at": booking.updated_at,
            },
        )
        logger.debug(f"Saved booking {booking.id} ({booking.status.value})")

    def delete(self, booking_id: UUID) -> None:
        BookingModel.objects.filter(pk=booking_id).delete()

    @staticmethod
    def _to_entity(row: BookingModel) -> Booking:
        return Booking(
            id=row.id,
            tourist_id=row.tourist_id,
            service_id=row.service_id,
            service_date=row.service_date,
            number_of_people=row.number_of_people,
            total_price=Money(row.total_price, row.currency),
            special_requests=row.special_requests,
            status=BookingStatus(row.status),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


class DjangoServiceCatalog:
    """Read side of the catalog as the booking context sees it."""

    def get_service(self, service_id: UUID) -> BookedService | None:
        row = Service.objects.filter(pk=service_id).first()
        if row is None:
            return None
        return BookedService(
            id=row.id,
            owner_id=row.owner_id,
            name=row.name,
            unit_price=Money(row.price, row.currency),
        )

    def owned_service_ids(self, owner_id: int) -> frozenset[UUID]:
        return frozenset(Service.objects.filter(owner_id=owner_id).values_list("id", flat=True))
