"""Flow Helpers: shared step execution and notification for the launch/bootstrap flows.

Invariants:
    - run_step maps every collaborator failure to a ChainLaunchError at the call site
    - ChainLaunchError raised by a collaborator passes through unchanged
    - asyncio.CancelledError is logged and re-raised, never converted or swallowed
    - notify never raises: a broken sink is logged and the flow continues
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from chainlaunch.core.errors import (
    ChainLaunchError,
    ErrorContext,
    OperationTimeoutError,
)
from chainlaunch.core.events import Event
from chainlaunch.core.repository_protocols import EventSink

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_step(
    step: str,
    awaitable: Awaitable[T],
    to_error: Callable[[Exception], ChainLaunchError],
    context: ErrorContext,
    timeout: float | None = None,
) -> T:
    """Await one external step, bounded by timeout, with typed failure mapping."""
    context.step = step
    try:
        return await asyncio.wait_for(awaitable, timeout)
    except ChainLaunchError as e:
        if e.context.launch_id is None:
            e.context.launch_id = context.launch_id
        e.context.step = e.context.step or step
        raise
    except asyncio.CancelledError:
        logger.info(
            "Step cancelled", extra={"step": step, "launch_id": context.launch_id},
        )
        raise
    except asyncio.TimeoutError as e:
        raise OperationTimeoutError(step, timeout, context) from e
    except Exception as e:
        raise to_error(e) from e


def notify(sink: EventSink, event: Event) -> None:
    """Best-effort delivery of one event."""
    try:
        sink.send(event)
    except Exception:
        logger.warning("Event sink failed for: %s", event.text, exc_info=True)
