"""Tests for EventBus."""

from __future__ import annotations

from maskedit.core.event_bus import EventBus
from maskedit.core.events import Event, EventType


def _event(event_type=EventType.EDIT_APPLIED):
    return Event(type=event_type, data=None, timestamp=0.0)


def test_subscribe_and_publish():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.EDIT_APPLIED, received.append)
    event = _event()
    assert bus.publish(event) == 1
    assert received == [event]


def test_returned_callable_unsubscribes():
    bus = EventBus()
    received = []
    remove = bus.subscribe(EventType.EDIT_APPLIED, received.append)
    remove()
    bus.publish(_event())
    assert received == []
    assert bus.has_subscribers(EventType.EDIT_APPLIED) is False


def test_unsubscribe_unknown_handler_is_ignored():
    bus = EventBus()
    bus.unsubscribe(EventType.CONFIG_CHANGED, print)


def test_failing_listener_does_not_stop_delivery():
    bus = EventBus()

    def bad_handler(e):
        raise RuntimeError("oops")

    received = []
    bus.subscribe(EventType.EDIT_REJECTED, bad_handler)
    bus.subscribe(EventType.EDIT_REJECTED, received.append)
    assert bus.publish(_event(EventType.EDIT_REJECTED)) == 1
    assert len(received) == 1


def test_only_matching_type_is_delivered():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.CONFIG_CHANGED, received.append)
    assert bus.publish(_event(EventType.EDIT_APPLIED)) == 0
    assert received == []
