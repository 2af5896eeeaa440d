"""Events: progress notifications emitted by the coordinator and bootstrapper.

Invariants:
    - Event is immutable once built
    - Events are informational only: no flow ever branches on an event
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from chainlaunch.core.domain_types import EventStatus


@dataclass(frozen=True)
class Event:
    """One human-readable progress notification."""
    status: EventStatus
    text: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def ongoing(text: str) -> Event:
    return Event(EventStatus.ONGOING, text)


def done(text: str) -> Event:
    return Event(EventStatus.DONE, text)
