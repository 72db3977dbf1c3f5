"""
Booking transition policy

The role-scoped transition table as a pure function. Nothing here touches
storage: callers pass the booking, the requested status and an actor
variant, and get back ``Allowed`` or ``Denied``.

| Current   | Tourist (owner) | Service owner          | Administrator |
|-----------|-----------------|------------------------|---------------|
| Pending   | Cancelled       | Confirmed, Cancelled   | any           |
| Confirmed | -               | Completed, Cancelled   | any           |
| Completed | - (blocked)     | - (terminal)           | any           |
| Cancelled | - (terminal)    | - (terminal)           | any           |
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from shared.domain.actors import Actor, Administrator, ServiceOwner, Tourist
from shared.domain.exceptions import AuthorizationError, InvalidTransitionError, ValidationError

from apps.bookings.domain.entities import BookingStatus, REQUESTABLE_STATUSES


class DenialKind(Enum):
    FORBIDDEN = 'forbidden'  # actor may not act on this booking at all
    INVALID = 'invalid'      # actor may act, but not this move from this state


@dataclass(frozen=True)
class Allowed:
    pass


@dataclass(frozen=True)
class Denied:
    reason: str
    kind: DenialKind

    def to_exception(self):
        if self.kind is DenialKind.FORBIDDEN:
            return AuthorizationError(self.reason)
        return InvalidTransitionError(self.reason)


Decision = Union[Allowed, Denied]

TOURIST_MOVES: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CANCELLED}),
}

SERVICE_OWNER_MOVES: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
}

# Statuses in which a booking may not be hard-deleted. Empty: deletion is
# currently allowed from any status, bypassing the cancellation path.
DELETION_BLOCKING_STATUSES: frozenset[BookingStatus] = frozenset()


def parse_requested_status(value: 'BookingStatus | str') -> BookingStatus:
    """
    Validate a requested target status

    Only Confirmed, Cancelled and Completed may be requested. Anything else
    is rejected before any authorization check runs.
    """
    if isinstance(value, BookingStatus):
        status = value
    else:
        try:
            status = BookingStatus(value)
        except ValueError:
            status = None

    if status not in REQUESTABLE_STATUSES:
        raise ValidationError(
            f"Invalid status {value!r}. Must be Confirmed, Cancelled, or Completed"
        )
    return status


def evaluate_transition(booking, requested: BookingStatus, actor: Actor) -> Decision:
    """
    Decide whether ``actor`` may move ``booking`` to ``requested``

    ``booking`` only needs ``tourist_id``, ``service_id`` and ``status``.
    """
    current = booking.status

    if isinstance(actor, Administrator):
        return Allowed()

    if isinstance(actor, Tourist):
        if booking.tourist_id != actor.user_id:
            return Denied("Not authorized", DenialKind.FORBIDDEN)
        if requested is not BookingStatus.CANCELLED:
            return Denied("Tourists can only cancel bookings", DenialKind.FORBIDDEN)
        if current is BookingStatus.COMPLETED:
            return Denied("Cannot cancel a completed booking", DenialKind.INVALID)
        return _check_move(TOURIST_MOVES, current, requested)

    if isinstance(actor, ServiceOwner):
        if not actor.owns(booking.service_id):
            return Denied("Not authorized", DenialKind.FORBIDDEN)
        return _check_move(SERVICE_OWNER_MOVES, current, requested)

    return Denied("Unknown actor", DenialKind.FORBIDDEN)


def _check_move(table, current: BookingStatus, requested: BookingStatus) -> Decision:
    if requested in table.get(current, frozenset()):
        return Allowed()
    return Denied(
        f"Cannot change booking status from {current.value} to {requested.value}",
        DenialKind.INVALID,
    )


def ensure_transition_allowed(booking, requested: BookingStatus, actor: Actor):
    """Raise the matching domain error when the transition is denied"""
    decision = evaluate_transition(booking, requested, actor)
    if isinstance(decision, Denied):
        raise decision.to_exception()


def can_delete(booking, actor: Actor) -> Decision:
    """
    Hard-delete policy

    The tourist who made the booking and administrators may delete it;
    service owners must cancel instead. The booking status is only
    consulted through ``DELETION_BLOCKING_STATUSES``.
    """
    if isinstance(actor, ServiceOwner):
        return Denied(
            "Business owners cannot delete bookings. Use cancel instead.",
            DenialKind.FORBIDDEN,
        )
    if isinstance(actor, Tourist) and booking.tourist_id != actor.user_id:
        return Denied("Not authorized", DenialKind.FORBIDDEN)
    if not isinstance(actor, (Tourist, Administrator)):
        return Denied("Unknown actor", DenialKind.FORBIDDEN)
    if booking.status in DELETION_BLOCKING_STATUSES:
        return Denied(
            f"Bookings in status {booking.status.value} cannot be deleted",
            DenialKind.INVALID,
        )
    return Allowed()
