"""Launch Messages: consensus messages that schedule or cancel a chain launch.

Invariants:
    - Messages are immutable once built
    - Response models ignore unknown fields, as protobuf decoding does; only a payload
      of the wrong shape or type means the trigger cannot be confirmed
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class MsgTriggerLaunch(BaseModel):
    """Schedule chain launch_id to start at launch_time."""

    model_config = ConfigDict(frozen=True)

    coordinator: str
    launch_id: int
    launch_time: datetime


class MsgRevertLaunch(BaseModel):
    """Cancel a scheduled launch."""

    model_config = ConfigDict(frozen=True)

    coordinator: str
    launch_id: int


class MsgTriggerLaunchResponse(BaseModel):
    """Empty ack of MsgTriggerLaunch."""
