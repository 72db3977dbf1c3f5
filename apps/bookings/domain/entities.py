"""
Booking Domain Entities

Core business entities for the booking domain:
- Booking: Main aggregate representing a reservation of a service
- BookingStatus: FSM states for booking lifecycle
- BookedService: The slice of a catalog service a booking depends on
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

from shared.domain.base import Aggregate, ValueObject, utc_now
from shared.domain.exceptions import ValidationError
from shared.domain.value_objects import Money


class BookingStatus(Enum):
    """
    Booking Status Finite State Machine

    State transitions (who may trigger them lives in transitions.py):
    - PENDING -> CONFIRMED (service owner accepted)
    - PENDING -> CANCELLED (tourist or service owner)
    - CONFIRMED -> COMPLETED (service delivered)
    - CONFIRMED -> CANCELLED (service owner)
    CANCELLED and COMPLETED are terminal for everyone but administrators.
    """
    PENDING = 'Pending'
    CONFIRMED = 'Confirmed'
    CANCELLED = 'Cancelled'
    COMPLETED = 'Completed'


# Statuses a caller may ask for; Pending is only ever the initial state
REQUESTABLE_STATUSES = frozenset({
    BookingStatus.CONFIRMED,
    BookingStatus.CANCELLED,
    BookingStatus.COMPLETED,
})

# Detail edits are refused here: cancel and book again instead
DETAILS_LOCKED_STATUSES = frozenset({
    BookingStatus.CONFIRMED,
    BookingStatus.COMPLETED,
})


@dataclass(frozen=True)
class BookedService(ValueObject):
    """Service data read from the catalog when a booking is priced"""
    id: UUID
    owner_id: int
    name: str
    unit_price: Money

    def price_for(self, number_of_people: int) -> Money:
        return self.unit_price * number_of_people


def _ensure_future(service_date: datetime, now: datetime):
    if service_date <= now:
        raise ValidationError("Cannot book a date in the past")


def _people_count(number_of_people) -> int:
    if number_of_people is None:
        return 1
    if isinstance(number_of_people, bool) or not isinstance(number_of_people, int):
        raise ValidationError("Number of people must be an integer")
    return max(number_of_people, 1)


@dataclass(eq=False, kw_only=True)
class Booking(Aggregate):
    """
    Booking Aggregate Root

    A tourist's reservation of a catalog service for a given date.

    Key invariants:
    - total_price == service unit price x number_of_people, recomputed
      whenever number_of_people changes
    - service_date is strictly in the future at creation and whenever it
      is changed
    - status only moves along the transition table
    """

    tourist_id: int
    service_id: UUID
    service_date: datetime
    number_of_people: int = 1
    total_price: Money
    special_requests: str = ''
    status: BookingStatus = BookingStatus.PENDING

    def __post_init__(self):
        if self.number_of_people < 1:
            raise ValidationError("Number of people must be at least 1")

    @classmethod
    def create(
        cls,
        *,
        tourist_id: int,
        service: BookedService,
        service_date: datetime | None,
        number_of_people: int | None = None,
        special_requests: str | None = '',
        now: datetime | None = None,
    ) -> 'Booking':
        """
        Create a Pending booking priced from the service's unit price

        Events: BookingCreated
        """
        if service_date is None:
            raise ValidationError("Service ID and service date are required")
        _ensure_future(service_date, now or utc_now())
        people = _people_count(number_of_people)

        booking = cls(
            tourist_id=tourist_id,
            service_id=service.id,
            service_date=service_date,
            number_of_people=people,
            total_price=service.price_for(people),
            special_requests=special_requests or '',
            status=BookingStatus.PENDING,
        )

        from apps.bookings.domain.events import BookingCreated

        booking.add_event(BookingCreated(
            aggregate_id=booking.id,
            service_owner_id=service.owner_id,
            **booking._snapshot(service),
        ))
        return booking

    def update_details(
        self,
        *,
        service: BookedService,
        service_date: datetime | None = None,
        number_of_people: int | None = None,
        special_requests: str | None = None,
        now: datetime | None = None,
    ):
        """
        Edit date, head count or special requests

        Silent: no event is recorded. Everything is validated before the
        first field is changed.
        """
        if self.status in DETAILS_LOCKED_STATUSES:
            raise ValidationError(
                "Cannot update a confirmed or completed booking. "
                "Please cancel and create a new one."
            )

        now = now or utc_now()
        if service_date is not None:
            _ensure_future(service_date, now)
        if number_of_people is not None:
            if isinstance(number_of_people, bool) or not isinstance(number_of_people, int):
                raise ValidationError("Number of people must be an integer")
            if number_of_people < 1:
                raise ValidationError("Number of people must be at least 1")

        if service_date is not None:
            self.service_date = service_date
        if number_of_people is not None:
            self.number_of_people = number_of_people
            self.total_price = service.price_for(number_of_people)
        if special_requests is not None:
            self.special_requests = special_requests
        self.touch(now)

    def transition_to(self, requested: BookingStatus, *, actor, service: BookedService):
        """
        Move to ``requested`` if the transition table lets ``actor`` do so

        Events: BookingConfirmed | BookingCancelled | BookingCompleted
        """
        from apps.bookings.domain.events import (
            BookingCancelled,
            BookingCompleted,
            BookingConfirmed,
        )
        from apps.bookings.domain.transitions import ensure_transition_allowed

        ensure_transition_allowed(self, requested, actor)

        previous = self.status
        self.status = requested
        self.touch()

        payload = self._snapshot(service)
        if requested is BookingStatus.CONFIRMED:
            self.add_event(BookingConfirmed(aggregate_id=self.id, **payload))
        elif requested is BookingStatus.CANCELLED:
            self.add_event(BookingCancelled(
                aggregate_id=self.id,
                previous_status=previous.value,
                **payload,
            ))
        elif requested is BookingStatus.COMPLETED:
            self.add_event(BookingCompleted(aggregate_id=self.id, **payload))

    def _snapshot(self, service: BookedService) -> dict:
        return {
            'booking_id': self.id,
            'tourist_id': self.tourist_id,
            'service_id': self.service_id,
            'service_name': service.name,
            'service_date': self.service_date,
            'number_of_people': self.number_of_people,
            'total_price': self.total_price,
            'special_requests': self.special_requests,
        }

    def __str__(self):
        return f"Booking {self.id} ({self.status.value})"

    def __repr__(self):
        return (
            f"Booking(id={self.id}, service_id={self.service_id}, "
            f"status={self.status.value}, service_date={self.service_date})"
        )
