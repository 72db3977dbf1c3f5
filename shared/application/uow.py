"""
Unit of Work Pattern

Manages database transactions and ensures that domain events
are published only after successful transaction commit.
"""

from abc import ABC, abstractmethod
from typing import List
import logging

from django.db import transaction

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """Abstract Unit of Work pattern"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        """Commit the transaction"""
        pass

    @abstractmethod
    def rollback(self):
        """Rollback the transaction"""
        pass

    @abstractmethod
    def collect_events(self, aggregate):
        """Collect events from aggregate root"""
        pass


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Django implementation of Unit of Work

    Manages Django database transactions and ensures domain events
    are published only after the outermost transaction commits.

    Usage:
        with DjangoUnitOfWork() as uow:
            # Load aggregate
            booking = booking_repo.get_by_id(booking_id, lock=True)

            # Execute domain logic
            booking.transition_to(BookingStatus.CONFIRMED, actor=actor, service=service)

            # Collect events
            uow.collect_events(booking)

            # Save changes
            booking_repo.save(booking)

            # Transaction commits here
        # Events are published after commit
    """

    def __init__(self, bus=None):
        self._events: List[DomainEvent] = []
        self._transaction = None
        self._bus = bus

    def __enter__(self):
        """Start database transaction"""
        self._transaction = transaction.atomic()
        self._transaction.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Complete or rollback transaction"""
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            if self._transaction:
                self._transaction.__exit__(exc_type, exc_val, exc_tb)
        return False

    def commit(self):
        """
        Commit changes and publish events

        Events are published using Django's transaction.on_commit()
        so they are only sent once the outermost transaction has been
        committed. Nothing is sent if an enclosing block rolls back.
        """
        logger.debug(f"Committing transaction with {len(self._events)} events")

        # Copy events before clearing
        events = self._events.copy()
        self._events.clear()

        # Schedule event publishing after commit
        if events:
            transaction.on_commit(lambda: self._publish_events(events))

    def rollback(self):
        """Rollback changes and discard events"""
        logger.warning(f"Rolling back transaction, discarding {len(self._events)} events")
        self._events.clear()

    def collect_events(self, aggregate):
        """
        Collect events from aggregate root

        Extracts all domain events from the aggregate and
        clears them from the aggregate.
        """
        if hasattr(aggregate, 'events'):
            new_events = aggregate.events
            if new_events:
                self._events.extend(new_events)
                aggregate.clear_events()
                logger.debug(
                    f"Collected {len(new_events)} events from "
                    f"{aggregate.__class__.__name__} (ID: {aggregate.id})"
                )

    def record_event(self, event: DomainEvent):
        """Record an event that is not owned by an aggregate root"""
        self._events.append(event)

    def _publish_events(self, events: List[DomainEvent]):
        """
        Publish collected events to message bus

        Called from transaction.on_commit(). Handler failures are re-raised
        by the bus and surface from the commit; the primary change is
        already durable.
        """
        if self._bus is None:
            from shared.application.message_bus import message_bus
            bus = message_bus
        else:
            bus = self._bus

        logger.info(f"Publishing {len(events)} domain events after commit")
        bus.publish_events(events)
