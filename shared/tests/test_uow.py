from __future__ import annotations

from dataclasses import dataclass
from unittest import mock

import pytest
from django.contrib.auth import get_user_model
from django.db import transaction

from shared.application.message_bus import MessageBus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.base import Aggregate, DomainEvent

pytestmark = pytest.mark.django_db


@dataclass(kw_only=True)
class Happened(DomainEvent):
    pass


@dataclass(eq=False, kw_only=True)
class Thing(Aggregate):
    def poke(self):
        self.add_event(Happened(aggregate_id=self.id))


def _bus_with(handler) -> MessageBus:
    bus = MessageBus()
    bus.register_event_handler(Happened, handler)
    return bus


def test_events_wait_for_the_commit(django_capture_on_commit_callbacks):
    handler = mock.Mock()
    thing = Thing()
    thing.poke()

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with DjangoUnitOfWork(bus=_bus_with(handler)) as uow:
            uow.collect_events(thing)
        handler.assert_not_called()

    assert len(callbacks) == 1
    handler.assert_called_once()
    assert thing.events == []


def test_rollback_discards_events_and_changes(django_capture_on_commit_callbacks):
    handler = mock.Mock()
    User = get_user_model()

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(RuntimeError):
            with DjangoUnitOfWork(bus=_bus_with(handler)) as uow:
                User.objects.create_user(username="ghost")
                uow.record_event(Happened())
                raise RuntimeError("abort")

    assert callbacks == []
    handler.assert_not_called()
    assert not User.objects.filter(username="ghost").exists()


def test_nothing_published_without_events(django_capture_on_commit_callbacks):
    bus = mock.Mock()

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with DjangoUnitOfWork(bus=bus):
            pass

    assert callbacks == []
    bus.publish_events.assert_not_called()


@pytest.mark.django_db(transaction=True)
def test_enclosing_rollback_publishes_nothing():
    handler = mock.Mock()
    User = get_user_model()

    with pytest.raises(RuntimeError):
        with transaction.atomic():
            with DjangoUnitOfWork(bus=_bus_with(handler)) as uow:
                User.objects.create_user(username="undone")
                uow.record_event(Happened())
            raise RuntimeError("outer failure")

    handler.assert_not_called()
    assert not User.objects.filter(username="undone").exists()


@pytest.mark.django_db(transaction=True)
def test_published_once_outermost_block_commits():
    handler = mock.Mock()

    with transaction.atomic():
        with DjangoUnitOfWork(bus=_bus_with(handler)) as uow:
            uow.record_event(Happened())
        handler.assert_not_called()

    handler.assert_called_once()


@pytest.mark.django_db(transaction=True)
def test_handler_failure_surfaces_but_change_is_kept():
    User = get_user_model()
    handler = mock.Mock(side_effect=RuntimeError("mail server down"))

    with pytest.raises(RuntimeError, match="mail server down"):
        with DjangoUnitOfWork(bus=_bus_with(handler)) as uow:
            User.objects.create_user(username="kept")
            uow.record_event(Happened())

    assert User.objects.filter(username="kept").exists()
