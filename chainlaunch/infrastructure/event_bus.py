"""Event Bus: one-way, non-blocking delivery of progress events.

Invariants:
    - send() never blocks and never raises: a full queue drops the event and logs it
    - Events are delivered in send order
    - drain() empties the queue without awaiting

Design Decisions:
    - Bounded asyncio.Queue: a slow or absent consumer cannot grow memory without limit
    - LoggingEventSink for callers that only want events in the log stream
"""

import asyncio
import logging

from chainlaunch.core.events import Event

logger = logging.getLogger(__name__)


class EventBus:
    """Queue-backed EventSink. Consumers await get() or call drain()."""

    def __init__(self, maxsize: int = 256):
        self._queue: asyncio.Queue[Event] = asyncio.Queue(maxsize=maxsize)
        self.dropped = 0

    def send(self, event: Event) -> None:
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(
                "Event queue full, dropping event: %s", event.text,
                extra={"event_status": event.status.value},
            )

    async def get(self) -> Event:
        return await self._queue.get()

    def drain(self) -> list[Event]:
        events = []
        while True:
            try:
                events.append(self._queue.get_nowait())
            except asyncio.QueueEmpty:
                return events


class LoggingEventSink:
    """EventSink that writes every event to the logger."""

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger

    def send(self, event: Event) -> None:
        self._log.info(event.text, extra={"event_status": event.status.value})
