"""Launch Window: pure time-window arithmetic for scheduling a chain launch.

Invariants:
    - resolve_window is PURE: params and now are inputs, callers fetch both fresh per attempt
    - The safety margin is added to the lower bound only
    - Bounds are inclusive on both ends
    - min <= max is assumed from protocol params and never re-validated here

Design Decisions:
    - Safety margin (30s default): block time when the tx executes is not predictable,
      so the minimum is pushed a few seconds out to stay above the on-chain minimum
    - Aware datetimes only: comparing against a naive value is rejected instead of guessed
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from chainlaunch.core.domain_types import LaunchBound
from chainlaunch.core.errors import (
    ErrorContext,
    InvalidLaunchTimeError,
    OutOfRangeLaunchTimeError,
)


MIN_LAUNCH_TIME_OFFSET: timedelta = timedelta(seconds=30)

# Protobuf JSON durations come over the wire as "86400s" or "0.5s"
_PROTO_DURATION = re.compile(r"^(?P<seconds>-?\d+(?:\.\d+)?)s$")


class LaunchParams(BaseModel):
    """Launch time range offsets from the launch module params."""

    model_config = ConfigDict(frozen=True)

    min_launch_time: timedelta
    max_launch_time: timedelta

    @field_validator("min_launch_time", "max_launch_time", mode="before")
    @classmethod
    def parse_proto_duration(cls, v: Any) -> Any:
        if isinstance(v, str):
            match = _PROTO_DURATION.match(v.strip())
            if match:
                return timedelta(seconds=float(match.group("seconds")))
        return v

    @classmethod
    def from_response(cls, data: "LaunchParams | dict") -> "LaunchParams":
        """Accept either a flat dict or the module's nested launch_time_range shape."""
        if isinstance(data, LaunchParams):
            return data
        if "launch_time_range" in data:
            data = data["launch_time_range"]
        return cls.model_validate(data)


@dataclass(frozen=True)
class LaunchWindow:
    """Inclusive range within which a launch may be scheduled."""
    min_launch_time: datetime
    max_launch_time: datetime

    def contains(self, moment: datetime) -> bool:
        return self.min_launch_time <= moment <= self.max_launch_time


def resolve_window(
    params: LaunchParams,
    now: datetime,
    safety_margin: timedelta = MIN_LAUNCH_TIME_OFFSET,
) -> LaunchWindow:
    """Derive the legal launch window from params and the coordinator clock."""
    return LaunchWindow(
        min_launch_time=now + params.min_launch_time + safety_margin,
        max_launch_time=now + params.max_launch_time,
    )


def validate_or_default(
    requested: datetime | None,
    window: LaunchWindow,
    context: ErrorContext | None = None,
) -> datetime:
    """Return the requested time if inside the window, window minimum when absent."""
    if requested is None:
        return window.min_launch_time

    if requested.tzinfo is None or requested.utcoffset() is None:
        raise InvalidLaunchTimeError(
            f"launch time {requested.isoformat()} has no timezone", context,
        )

    if requested < window.min_launch_time:
        raise OutOfRangeLaunchTimeError(
            bound=window.min_launch_time,
            requested=requested,
            bound_kind=LaunchBound.MINIMUM.value,
            context=context,
        )
    if requested > window.max_launch_time:
        raise OutOfRangeLaunchTimeError(
            bound=window.max_launch_time,
            requested=requested,
            bound_kind=LaunchBound.MAXIMUM.value,
            context=context,
        )
    return requested
