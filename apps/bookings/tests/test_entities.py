"""Unit tests for the Booking aggregate (no database)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from apps.bookings.domain.entities import BookedService, Booking, BookingStatus
from apps.bookings.domain.events import (
    BookingCancelled,
    BookingCompleted,
    BookingConfirmed,
    BookingCreated,
)
from shared.domain.actors import Administrator, ServiceOwner, Tourist
from shared.domain.exceptions import AuthorizationError, InvalidTransitionError, ValidationError
from shared.domain.value_objects import Money

NOW = datetime(2030, 1, 1, 9, 0, tzinfo=timezone.utc)
NEXT_WEEK = NOW + timedelta(days=7)


@pytest.fixture
def booked_service():
    return BookedService(id=uuid4(), owner_id=20, name="Luxor Balloon Ride", unit_price=Money(Decimal("100.00")))


def _create(service, **kwargs) -> Booking:
    params = {"tourist_id": 10, "service": service, "service_date": NEXT_WEEK, "now": NOW}
    params.update(kwargs)
    return Booking.create(**params)


def test_create_prices_by_head_count(booked_service):
    booking = _create(booked_service, number_of_people=3)

    assert booking.status is BookingStatus.PENDING
    assert booking.number_of_people == 3
    assert booking.total_price == Money(Decimal("300.00"))


@pytest.mark.parametrize("people", [None, 0, -4])
def test_create_books_one_person_when_count_missing_or_too_low(booked_service, people):
    booking = _create(booked_service, number_of_people=people)

    assert booking.number_of_people == 1
    assert booking.total_price == Money(Decimal("100.00"))


def test_create_records_booking_created_for_service_owner(booked_service):
    booking = _create(booked_service, number_of_people=2, special_requests="Vegetarian lunch")

    [event] = booking.events
    assert isinstance(event, BookingCreated)
    assert event.service_owner_id == 20
    assert event.booking_id == booking.id
    assert event.service_name == "Luxor Balloon Ride"
    assert event.total_price == Money(Decimal("200.00"))
    assert event.special_requests == "Vegetarian lunch"


@pytest.mark.parametrize("service_date", [NOW, NOW - timedelta(minutes=1)])
def test_create_rejects_dates_not_strictly_in_the_future(booked_service, service_date):
    with pytest.raises(ValidationError, match="past"):
        _create(booked_service, service_date=service_date)


def test_create_requires_a_service_date(booked_service):
    with pytest.raises(ValidationError):
        _create(booked_service, service_date=None)


def test_update_recomputes_price_from_current_service_price(booked_service):
    booking = _create(booked_service, number_of_people=2)
    repriced = BookedService(
        id=booked_service.id,
        owner_id=booked_service.owner_id,
        name=booked_service.name,
        unit_price=Money(Decimal("120.00")),
    )

    booking.update_details(service=repriced, number_of_people=4, now=NOW)

    assert booking.number_of_people == 4
    assert booking.total_price == Money(Decimal("480.00"))


def test_update_is_silent(booked_service):
    booking = _create(booked_service)
    booking.clear_events()

    booking.update_details(service=booked_service, special_requests="Window seat", now=NOW)

    assert booking.special_requests == "Window seat"
    assert booking.events == []


def test_update_validates_everything_before_changing_anything(booked_service):
    booking = _create(booked_service, number_of_people=2)
    new_date = NEXT_WEEK + timedelta(days=1)

    with pytest.raises(ValidationError):
        booking.update_details(service=booked_service, service_date=new_date, number_of_people=0, now=NOW)

    assert booking.service_date == NEXT_WEEK
    assert booking.number_of_people == 2
    assert booking.total_price == Money(Decimal("200.00"))


def test_update_rejects_past_date(booked_service):
    booking = _create(booked_service)
    with pytest.raises(ValidationError):
        booking.update_details(service=booked_service, service_date=NOW - timedelta(days=1), now=NOW)


@pytest.mark.parametrize("status", [BookingStatus.CONFIRMED, BookingStatus.COMPLETED])
def test_update_refused_once_confirmed_or_completed(booked_service, status):
    booking = _create(booked_service)
    booking.status = status

    with pytest.raises(ValidationError, match="cancel and create a new one"):
        booking.update_details(service=booked_service, special_requests="Late pickup", now=NOW)


def test_transition_records_matching_events(booked_service):
    owner = ServiceOwner(20, frozenset({booked_service.id}))
    booking = _create(booked_service)
    booking.clear_events()

    booking.transition_to(BookingStatus.CONFIRMED, actor=owner, service=booked_service)
    booking.transition_to(BookingStatus.COMPLETED, actor=owner, service=booked_service)

    confirmed, completed = booking.events
    assert isinstance(confirmed, BookingConfirmed)
    assert isinstance(completed, BookingCompleted)
    assert booking.status is BookingStatus.COMPLETED


def test_cancel_event_carries_previous_status(booked_service):
    booking = _create(booked_service)
    booking.clear_events()

    booking.transition_to(BookingStatus.CANCELLED, actor=Tourist(10), service=booked_service)

    [event] = booking.events
    assert isinstance(event, BookingCancelled)
    assert event.previous_status == "Pending"


def test_denied_transition_leaves_booking_untouched(booked_service):
    booking = _create(booked_service)
    booking.clear_events()

    with pytest.raises(AuthorizationError):
        booking.transition_to(BookingStatus.CONFIRMED, actor=Tourist(10), service=booked_service)
    with pytest.raises(AuthorizationError):
        booking.transition_to(
            BookingStatus.CONFIRMED,
            actor=ServiceOwner(21, frozenset()),
            service=booked_service,
        )

    assert booking.status is BookingStatus.PENDING
    assert booking.events == []


def test_nothing_leaves_cancelled_without_an_administrator(booked_service):
    owner = ServiceOwner(20, frozenset({booked_service.id}))
    booking = _create(booked_service)
    booking.transition_to(BookingStatus.CANCELLED, actor=owner, service=booked_service)

    for requested in (BookingStatus.CONFIRMED, BookingStatus.COMPLETED):
        with pytest.raises(InvalidTransitionError):
            booking.transition_to(requested, actor=owner, service=booked_service)

    booking.transition_to(BookingStatus.CONFIRMED, actor=Administrator(1), service=booked_service)
    assert booking.status is BookingStatus.CONFIRMED


def test_constructor_rejects_empty_booking():
    with pytest.raises(ValidationError):
        Booking(
            tourist_id=1,
            service_id=uuid4(),
            service_date=NEXT_WEEK,
            number_of_people=0,
            total_price=Money(Decimal("0")),
        )
