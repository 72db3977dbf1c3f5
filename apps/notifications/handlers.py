"""
Event handlers turning committed domain events into notifications.

Registered on the global message bus by ``NotificationsConfig.ready``.
They run after the primary change has committed; a notification that
cannot be stored raises, and the bus reports it to the caller.
"""

import logging

from apps.bookings.domain.events import (
    BookingCancelled,
    BookingCompleted,
    BookingConfirmed,
    BookingCreated,
)
from apps.reviews.events import ReviewPosted
from apps.users.services import display_name, get_user

from .catalog import (
    BookingCancelledNotice,
    BookingCompletedNotice,
    BookingConfirmedNotice,
    NewBookingReceived,
    Recipient,
    ReviewReceived,
)
from .services import NotificationSink

logger = logging.getLogger(__name__)


def _recipient(user_id: int) -> Recipient | None:
    user = get_user(user_id)
    if user is None:
        logger.warning(f"Notification recipient {user_id} no longer exists")
        return None
    return Recipient(user_id=user.pk, name=display_name(user), email=user.email or "")


def _sink() -> NotificationSink:
    return NotificationSink()


def on_booking_created(event: BookingCreated):
    recipient = _recipient(event.service_owner_id)
    if recipient:
        _sink().notify(
            NewBookingReceived(
                booking_id=event.booking_id,
                service_name=event.service_name,
                service_date=event.service_date,
                total_price=event.total_price,
            ),
            recipient,
        )


def on_booking_confirmed(event: BookingConfirmed):
    recipient = _recipient(event.tourist_id)
    if recipient:
        _sink().notify(
            BookingConfirmedNotice(
                booking_id=event.booking_id,
                service_name=event.service_name,
                service_date=event.service_date,
                number_of_people=event.number_of_people,
                total_price=event.total_price,
                special_requests=event.special_requests,
            ),
            recipient,
        )


def on_booking_cancelled(event: BookingCancelled):
    recipient = _recipient(event.tourist_id)
    if recipient:
        _sink().notify(
            BookingCancelledNotice(
                booking_id=event.booking_id,
                service_name=event.service_name,
                service_date=event.service_date,
            ),
            recipient,
        )


def on_booking_completed(event: BookingCompleted):
    recipient = _recipient(event.tourist_id)
    if recipient:
        _sink().notify(
            BookingCompletedNotice(booking_id=event.booking_id, service_name=event.service_name),
            recipient,
        )


def on_review_posted(event: ReviewPosted):
    # only services have an owner to tell
    if event.service_owner_id is None:
        return
    recipient = _recipient(event.service_owner_id)
    if recipient:
        _sink().notify(
            ReviewReceived(
                review_id=event.review_id,
                service_id=event.target_id,
                service_name=event.target_name,
                rating=event.rating,
                comment=event.comment,
            ),
            recipient,
        )


HANDLERS = (
    (BookingCreated, on_booking_created),
    (BookingConfirmed, on_booking_confirmed),
    (BookingCancelled, on_booking_cancelled),
    (BookingCompleted, on_booking_completed),
    (ReviewPosted, on_review_posted),
)


def register_handlers(bus):
    for event_type, handler in HANDLERS:
        bus.register_event_handler(event_type, handler)
