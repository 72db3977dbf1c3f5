from __future__ import annotations

from dataclasses import dataclass
from unittest import mock

import pytest

from shared.application.message_bus import MessageBus
from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class Pinged(DomainEvent):
    note: str = ""


@dataclass(kw_only=True)
class Ignored(DomainEvent):
    pass


def test_registering_twice_runs_handler_once():
    bus = MessageBus()
    handler = mock.Mock()

    bus.register_event_handler(Pinged, handler)
    bus.register_event_handler(Pinged, handler)
    bus.publish_events([Pinged(note="hi")])

    handler.assert_called_once()
    assert bus.handlers_for(Pinged) == [handler]


def test_every_handler_sees_every_event():
    bus = MessageBus()
    first, second = mock.Mock(), mock.Mock()
    bus.register_event_handler(Pinged, first)
    bus.register_event_handler(Pinged, second)
    events = [Pinged(note="a"), Pinged(note="b")]

    bus.publish_events(events)

    assert [c.args[0] for c in first.call_args_list] == events
    assert [c.args[0] for c in second.call_args_list] == events


def test_failure_does_not_stop_other_handlers_and_is_reraised(caplog):
    bus = MessageBus()
    boom = mock.Mock(side_effect=RuntimeError("smtp down"))
    later = mock.Mock(side_effect=ValueError("second"))
    survivor = mock.Mock()
    for handler in (boom, later, survivor):
        bus.register_event_handler(Pinged, handler)

    with pytest.raises(RuntimeError, match="smtp down"):
        bus.publish_events([Pinged()])

    survivor.assert_called_once()
    assert sum(record.levelname == "ERROR" for record in caplog.records) == 2


def test_event_without_handlers_is_skipped():
    bus = MessageBus()
    handler = mock.Mock()
    bus.register_event_handler(Pinged, handler)

    bus.publish_events([Ignored()])

    handler.assert_not_called()


def test_unregister():
    bus = MessageBus()
    handler = mock.Mock()
    bus.register_event_handler(Pinged, handler)
    bus.unregister_event_handler(Pinged, handler)

    bus.publish_events([Pinged()])

    handler.assert_not_called()
