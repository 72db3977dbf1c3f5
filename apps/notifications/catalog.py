"""
Notification Catalog

A closed set of typed notification events. Each event type has exactly one
template that renders it, for a given recipient, into the category, texts,
priority, deep link and optional email of the notification. Templates are
pure: no queries, no I/O.

Usage:
    rendered = render(BookingConfirmedNotice(...), recipient)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Dict, Optional, Type
from uuid import UUID

from django.conf import settings  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.html import escape  # type: ignore

from shared.domain.value_objects import Money

from .models import Notification

Category = Notification.Category
Priority = Notification.Priority


@dataclass(frozen=True)
class Recipient:
    user_id: int
    name: str
    email: str


@dataclass(frozen=True)
class EmailPayload:
    to: str
    subject: str
    html: str


@dataclass(frozen=True)
class RenderedNotification:
    category: str
    title: str
    message: str
    priority: str = Priority.MEDIUM
    related_entity_id: Optional[UUID] = None
    related_entity_kind: str = ""
    action_url: str = ""
    email: Optional[EmailPayload] = None


# ===== Events =====

@dataclass(frozen=True)
class NewBookingReceived:
    """To the service owner when a booking is made"""
    booking_id: UUID
    service_name: str
    service_date: datetime
    total_price: Money


@dataclass(frozen=True)
class BookingConfirmedNotice:
    booking_id: UUID
    service_name: str
    service_date: datetime
    number_of_people: int
    total_price: Money
    special_requests: str = ""


@dataclass(frozen=True)
class BookingCancelledNotice:
    booking_id: UUID
    service_name: str
    service_date: datetime


@dataclass(frozen=True)
class BookingCompletedNotice:
    booking_id: UUID
    service_name: str


@dataclass(frozen=True)
class ReviewReceived:
    """To the service owner when a tourist reviews their service"""
    review_id: UUID
    service_id: UUID
    service_name: str
    rating: int
    comment: str = ""


@dataclass(frozen=True)
class AdApproved:
    ad_id: UUID
    promo_code: str
    valid_until: date


@dataclass(frozen=True)
class AdRejected:
    ad_id: UUID
    reason: str


@dataclass(frozen=True)
class TripReminder:
    trip_id: UUID
    trip_title: str


@dataclass(frozen=True)
class Welcome:
    pass


NOTIFICATION_EVENT_TYPES: tuple[type, ...] = (
    NewBookingReceived,
    BookingConfirmedNotice,
    BookingCancelledNotice,
    BookingCompletedNotice,
    ReviewReceived,
    AdApproved,
    AdRejected,
    TripReminder,
    Welcome,
)

Template = Callable[[object, Recipient], RenderedNotification]

_templates: Dict[Type, Template] = {}


def template(event_type: Type):
    """Register the template for ``event_type``"""
    def decorator(func: Template) -> Template:
        _templates[event_type] = func
        return func
    return decorator


def render(event, recipient: Recipient) -> RenderedNotification:
    try:
        renderer = _templates[type(event)]
    except KeyError:
        raise LookupError(f"No notification template for {type(event).__name__}") from None
    return renderer(event, recipient)


def missing_templates() -> list[type]:
    return [event_type for event_type in NOTIFICATION_EVENT_TYPES if event_type not in _templates]


# ===== Helpers =====

def _platform() -> str:
    return getattr(settings, "PLATFORM_NAME", "TourisMe Luxor")


def _format_date(value) -> str:
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        value = value.date()
    return value.strftime("%d %b %Y")


def _format_money(value: Money) -> str:
    return f"{value.quantized()} {value.currency}"


def _email(recipient: Recipient, subject: str, body: str) -> Optional[EmailPayload]:
    if not recipient.email:
        return None
    html = (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        f"<p>Hi {escape(recipient.name)},</p>{body}"
        '<p style="color: #7f8c8d; font-size: 12px;">This is an automated email. Please do not reply.</p>'
        "</div>"
    )
    return EmailPayload(to=recipient.email, subject=f"{subject} - {_platform()}", html=html)


# ===== Templates =====

@template(NewBookingReceived)
def _new_booking(event: NewBookingReceived, recipient: Recipient) -> RenderedNotification:
    return RenderedNotification(
        category=Category.BOOKING_CREATED,
        title="New Booking Received",
        message=f"You have a new booking for {event.service_name}",
        priority=Priority.HIGH,
        related_entity_id=event.booking_id,
        related_entity_kind="Booking",
        action_url=f"/bookings/{event.booking_id}",
        email=_email(
            recipient,
            "New Booking Received",
            "<h1>New Booking!</h1>"
            f"<p>Service: {escape(event.service_name)}</p>"
            f"<p>Date: {_format_date(event.service_date)}</p>"
            f"<p>Revenue: {_format_money(event.total_price)}</p>",
        ),
    )


@template(BookingConfirmedNotice)
def _booking_confirmed(event: BookingConfirmedNotice, recipient: Recipient) -> RenderedNotification:
    requests = (
        f"<p><strong>Special Requests:</strong> {escape(event.special_requests)}</p>"
        if event.special_requests else ""
    )
    return RenderedNotification(
        category=Category.BOOKING_CONFIRMED,
        title="Booking Confirmed",
        message=f"Your booking for {event.service_name} has been confirmed!",
        priority=Priority.HIGH,
        related_entity_id=event.booking_id,
        related_entity_kind="Booking",
        action_url=f"/bookings/{event.booking_id}",
        email=_email(
            recipient,
            "Booking Confirmed",
            "<h1>Booking Confirmed!</h1>"
            "<p>Your booking has been confirmed!</p>"
            f"<p><strong>Service:</strong> {escape(event.service_name)}</p>"
            f"<p><strong>Date:</strong> {_format_date(event.service_date)}</p>"
            f"<p><strong>Number of People:</strong> {event.number_of_people}</p>"
            f"<p><strong>Total Price:</strong> {_format_money(event.total_price)}</p>"
            f"{requests}"
            "<p>We look forward to seeing you!</p>",
        ),
    )


@template(BookingCancelledNotice)
def _booking_cancelled(event: BookingCancelledNotice, recipient: Recipient) -> RenderedNotification:
    return RenderedNotification(
        category=Category.BOOKING_CANCELLED,
        title="Booking Cancelled",
        message=f"Your booking for {event.service_name} has been cancelled.",
        priority=Priority.HIGH,
        related_entity_id=event.booking_id,
        related_entity_kind="Booking",
        action_url=f"/bookings/{event.booking_id}",
        email=_email(
            recipient,
            "Booking Cancelled",
            "<h1>Booking Cancelled</h1>"
            "<p>Your booking has been cancelled.</p>"
            f"<p><strong>Service:</strong> {escape(event.service_name)}</p>"
            f"<p><strong>Date:</strong> {_format_date(event.service_date)}</p>"
            "<p>If you didn't request this cancellation, please contact us immediately.</p>",
        ),
    )


@template(BookingCompletedNotice)
def _booking_completed(event: BookingCompletedNotice, recipient: Recipient) -> RenderedNotification:
    return RenderedNotification(
        category=Category.BOOKING_COMPLETED,
        title="Booking Completed",
        message=f"Your booking for {event.service_name} is now complete! Please leave a review.",
        priority=Priority.MEDIUM,
        related_entity_id=event.booking_id,
        related_entity_kind="Booking",
        action_url=f"/bookings/{event.booking_id}",
    )


@template(ReviewReceived)
def _review_received(event: ReviewReceived, recipient: Recipient) -> RenderedNotification:
    stars = "&#11088;" * event.rating
    return RenderedNotification(
        category=Category.REVIEW_RECEIVED,
        title="New Review Received",
        message=f"You received a {event.rating}-star review on {event.service_name}",
        priority=Priority.LOW,
        related_entity_id=event.review_id,
        related_entity_kind="Review",
        action_url=f"/services/{event.service_id}",
        email=_email(
            recipient,
            "New Review Received",
            "<h1>New Review Received</h1>"
            f"<p>You received a new review for <strong>{escape(event.service_name)}</strong>!</p>"
            f"<p><strong>Rating:</strong> {stars}</p>"
            f'<p><strong>Comment:</strong> "{escape(event.comment)}"</p>'
            "<p>Keep up the great work!</p>",
        ),
    )


@template(AdApproved)
def _ad_approved(event: AdApproved, recipient: Recipient) -> RenderedNotification:
    return RenderedNotification(
        category=Category.AD_APPROVED,
        title="Advertisement Approved",
        message="Your advertisement has been approved and is now live!",
        related_entity_id=event.ad_id,
        related_entity_kind="Advertisement",
        action_url=f"/advertisements/{event.ad_id}",
        email=_email(
            recipient,
            "Advertisement Approved",
            "<h1>Advertisement Approved!</h1>"
            "<p>Great news! Your advertisement has been approved and is now live.</p>"
            f"<p><strong>Promo Code:</strong> {escape(event.promo_code)}</p>"
            f"<p><strong>Valid Until:</strong> {_format_date(event.valid_until)}</p>",
        ),
    )


@template(AdRejected)
def _ad_rejected(event: AdRejected, recipient: Recipient) -> RenderedNotification:
    return RenderedNotification(
        category=Category.AD_REJECTED,
        title="Advertisement Rejected",
        message=f"Your advertisement was rejected. Reason: {event.reason}",
        related_entity_id=event.ad_id,
        related_entity_kind="Advertisement",
        action_url=f"/advertisements/{event.ad_id}",
        email=_email(
            recipient,
            "Advertisement Rejected",
            "<h1>Advertisement Rejected</h1>"
            "<p>Unfortunately, your advertisement was not approved.</p>"
            f"<p><strong>Reason:</strong> {escape(event.reason)}</p>"
            "<p>Please review our advertising guidelines and submit a revised version.</p>",
        ),
    )


@template(TripReminder)
def _trip_reminder(event: TripReminder, recipient: Recipient) -> RenderedNotification:
    # in-app only
    return RenderedNotification(
        category=Category.TRIP_REMINDER,
        title="Trip Reminder",
        message=f'Your trip "{event.trip_title}" starts tomorrow!',
        priority=Priority.HIGH,
        related_entity_id=event.trip_id,
        related_entity_kind="TripPlan",
        action_url=f"/trips/{event.trip_id}",
    )


@template(Welcome)
def _welcome(event: Welcome, recipient: Recipient) -> RenderedNotification:
    return RenderedNotification(
        category=Category.SYSTEM_ANNOUNCEMENT,
        title=f"Welcome to {_platform()}!",
        message="Start exploring amazing attractions and services in Luxor.",
        priority=Priority.LOW,
        email=_email(
            recipient,
            "Welcome",
            f"<h1>Welcome to {_platform()}!</h1>"
            "<p>Thank you for joining us. We're excited to have you!</p>"
            "<ul>"
            "<li>Explore amazing attractions in Luxor</li>"
            "<li>Book tours and experiences</li>"
            "<li>Plan your perfect trip</li>"
            "<li>Discover local restaurants and rentals</li>"
            "</ul>",
        ),
    )
