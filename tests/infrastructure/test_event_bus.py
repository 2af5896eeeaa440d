"""Event Bus: tests for non-blocking delivery and overflow."""

import logging

from chainlaunch.core.events import done, ongoing
from chainlaunch.infrastructure.event_bus import EventBus, LoggingEventSink


async def test_events_delivered_in_order():
    bus = EventBus()
    bus.send(ongoing("Launching chain 1"))
    bus.send(done("Chain 1 will be launched"))
    assert (await bus.get()).text == "Launching chain 1"
    assert [e.text for e in bus.drain()] == ["Chain 1 will be launched"]


async def test_full_queue_drops_without_raising(caplog):
    bus = EventBus(maxsize=1)
    bus.send(ongoing("first"))
    with caplog.at_level(logging.WARNING):
        bus.send(ongoing("second"))
    assert bus.dropped == 1
    assert [e.text for e in bus.drain()] == ["first"]
    assert "dropping event" in caplog.text


async def test_drain_empty_bus():
    assert EventBus().drain() == []


def test_logging_sink_writes_event_text(caplog):
    with caplog.at_level(logging.INFO, logger="chainlaunch"):
        LoggingEventSink().send(done("Genesis initialized"))
    assert "Genesis initialized" in caplog.text
    assert caplog.records[-1].event_status == "done"
