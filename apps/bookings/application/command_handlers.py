"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Create a new Pending booking
- UpdateBookingDetailsCommand: Edit date, head count or special requests
- TransitionBookingCommand: Move a booking along the transition table
- DeleteBookingCommand: Hard-delete a booking
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable
from uuid import UUID
import logging

from django.db import DatabaseError
from django.utils import timezone

from shared.application.uow import DjangoUnitOfWork
from shared.domain.actors import Actor, Role, build_actor
from shared.domain.exceptions import (
    AuthorizationError,
    BookingCreationError,
    NotFoundError,
    ValidationError,
)
from apps.bookings.domain.entities import BookedService, Booking
from apps.bookings.domain.transitions import Denied, can_delete, parse_requested_status
from apps.bookings.repositories import DjangoBookingRepository, DjangoServiceCatalog

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking

    ``number_of_people`` below 1 (or missing) books a single person.
    """
    tourist_id: int
    service_id: UUID | None
    service_date: datetime | None
    number_of_people: int | None = None
    special_requests: str = ''


@dataclass
class UpdateBookingDetailsCommand:
    """Command to edit a booking; ``None`` leaves a field unchanged"""
    booking_id: UUID
    tourist_id: int
    service_date: datetime | None = None
    number_of_people: int | None = None
    special_requests: str | None = None


@dataclass
class TransitionBookingCommand:
    """Command to request a new status on behalf of an actor"""
    booking_id: UUID
    requested_status: str
    actor_id: int
    actor_role: str


@dataclass
class DeleteBookingCommand:
    """Command to hard-delete a booking"""
    booking_id: UUID
    actor_id: int
    actor_role: str


# ===== Helpers =====

def resolve_actor(actor_id: int, actor_role, service_catalog) -> Actor:
    """Build the actor variant, loading owned services for business owners"""
    role = Role.parse(actor_role)
    owned = ()
    if role is Role.LOCAL_BUSINESS_OWNER:
        owned = service_catalog.owned_service_ids(actor_id)
    return build_actor(actor_id, role, owned)


class _BookingHandler:
    """Shared wiring: repositories, clock and message bus"""

    def __init__(self, booking_repo=None, service_catalog=None, clock: Clock | None = None, bus=None):
        self.booking_repo = booking_repo or DjangoBookingRepository()
        self.service_catalog = service_catalog or DjangoServiceCatalog()
        self.clock = clock or timezone.now
        self.bus = bus

    def _load_booking(self, booking_id: UUID, *, lock: bool = False) -> Booking:
        booking = self.booking_repo.get_by_id(booking_id, lock=lock)
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    def _load_service(self, service_id: UUID) -> BookedService:
        service = self.service_catalog.get_service(service_id)
        if not service:
            raise NotFoundError("Service not found")
        return service


# ===== Command Handlers =====

class CreateBookingHandler(_BookingHandler):
    """
    Handler for CreateBooking command

    Strategy:
    1. Validate required fields and load the service (price source)
    2. Create the Booking aggregate (Pending, priced, BookingCreated event)
    3. Save it inside a unit of work
    4. Publish BookingCreated after commit (service owner notification)

    A database failure during the write is re-raised as
    BookingCreationError and nothing is published.
    """

    def handle(self, command: CreateBookingCommand) -> Booking:
        if not command.service_id or command.service_date is None:
            raise ValidationError("Service ID and service date are required")

        logger.info(
            f"Creating booking for service {command.service_id}, "
            f"tourist {command.tourist_id}, date {command.service_date}"
        )

        service = self._load_service(command.service_id)

        try:
            with DjangoUnitOfWork(bus=self.bus) as uow:
                booking = Booking.create(
                    tourist_id=command.tourist_id,
                    service=service,
                    service_date=command.service_date,
                    number_of_people=command.number_of_people,
                    special_requests=command.special_requests,
                    now=self.clock(),
                )

                uow.collect_events(booking)
                self.booking_repo.save(booking)
                # Event: BookingCreated
        except DatabaseError as exc:
            logger.error(f"Failed to persist booking for service {command.service_id}", exc_info=True)
            raise BookingCreationError("Failed to create booking") from exc

        logger.info(
            f"Booking created successfully: {booking.id} "
            f"({booking.number_of_people} people, {booking.total_price})"
        )
        return booking


class UpdateBookingDetailsHandler(_BookingHandler):
    """Handler for editing a booking's details (tourist only, no notification)"""

    def handle(self, command: UpdateBookingDetailsCommand) -> Booking:
        logger.info(f"Updating booking {command.booking_id}")

        with DjangoUnitOfWork(bus=self.bus) as uow:
            booking = self._load_booking(command.booking_id, lock=True)
            if booking.tourist_id != command.tourist_id:
                raise AuthorizationError("Not authorized")

            service = self._load_service(booking.service_id)
            booking.update_details(
                service=service,
                service_date=command.service_date,
                number_of_people=command.number_of_people,
                special_requests=command.special_requests,
                now=self.clock(),
            )

            uow.collect_events(booking)
            self.booking_repo.save(booking)

        logger.info(f"Booking {booking.id} updated")
        return booking


class TransitionBookingHandler(_BookingHandler):
    """
    Handler for status changes

    The requested status is validated before anything else, so a bogus
    status is a validation error whoever asks for it. The booking row stays
    locked while the transition is evaluated and applied.
    """

    def handle(self, command: TransitionBookingCommand) -> Booking:
        requested = parse_requested_status(command.requested_status)
        logger.info(
            f"Booking {command.booking_id}: {command.actor_role} {command.actor_id} "
            f"requests {requested.value}"
        )

        with DjangoUnitOfWork(bus=self.bus) as uow:
            booking = self._load_booking(command.booking_id, lock=True)
            actor = resolve_actor(command.actor_id, command.actor_role, self.service_catalog)
            service = self._load_service(booking.service_id)

            previous = booking.status
            booking.transition_to(requested, actor=actor, service=service)

            uow.collect_events(booking)
            self.booking_repo.save(booking)
            # Events: BookingConfirmed | BookingCancelled | BookingCompleted

        logger.info(f"Booking {booking.id} moved {previous.value} -> {booking.status.value}")
        return booking


class DeleteBookingHandler(_BookingHandler):
    """Handler for hard deletion (booking owner or administrator)"""

    def handle(self, command: DeleteBookingCommand):
        logger.info(f"Deleting booking {command.booking_id}")

        with DjangoUnitOfWork(bus=self.bus):
            booking = self._load_booking(command.booking_id, lock=True)
            actor = resolve_actor(command.actor_id, command.actor_role, self.service_catalog)

            decision = can_delete(booking, actor)
            if isinstance(decision, Denied):
                logger.warning(f"Refused to delete booking {booking.id}: {decision.reason}")
                raise decision.to_exception()

            self.booking_repo.delete(booking.id)

        logger.info(f"Booking {command.booking_id} deleted")
