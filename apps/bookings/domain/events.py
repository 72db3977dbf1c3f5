"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
They are collected on the Booking aggregate and published after the
transaction commits. Each one carries enough of the booking and its
service for the notification templates to render without another read.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from shared.domain.base import DomainEvent
from shared.domain.value_objects import Money


@dataclass(kw_only=True)
class BookingEvent(DomainEvent):
    """Snapshot of a booking at the moment something happened to it"""
    booking_id: UUID
    tourist_id: int
    service_id: UUID
    service_name: str
    service_date: datetime
    number_of_people: int
    total_price: Money
    special_requests: str = ''


@dataclass(kw_only=True)
class BookingCreated(BookingEvent):
    """
    Event: A new booking was created (status Pending)

    Triggers:
    - Notify the service owner (in-app + email with revenue)
    """
    service_owner_id: int


@dataclass(kw_only=True)
class BookingConfirmed(BookingEvent):
    """
    Event: Booking confirmed by the service owner or an administrator

    Triggers:
    - Notify the tourist (in-app + email)
    """


@dataclass(kw_only=True)
class BookingCancelled(BookingEvent):
    """
    Event: Booking was cancelled

    Triggers:
    - Notify the tourist (in-app + email)
    """
    previous_status: str


@dataclass(kw_only=True)
class BookingCompleted(BookingEvent):
    """
    Event: Service delivered (status Completed)

    Triggers:
    - Ask the tourist for a review (in-app only)
    """
