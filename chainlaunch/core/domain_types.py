"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - LaunchId is a non-negative integer chain identifier on the launch network
    - All valid states encoded as Enums, no raw string matching
    - InitStage order is the only legal order of the bootstrap state machine

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

LaunchId = NewType("LaunchId", int)

# Network identity the coordinator account signs for
SPN = "spn"


# ─── Enums ───────────────────────────────────────────────────────

class EventStatus(str, Enum):
    """Notification status tag."""
    ONGOING = "ongoing"
    DONE = "done"


class InitStage(str, Enum):
    """Bootstrap state machine for a single chain instance."""
    UNINITIALIZED = "uninitialized"
    HOME_RESET = "home_reset"
    BUILT = "built"
    COMMAND_INITIALIZED = "command_initialized"
    GENESIS_ACQUIRED = "genesis_acquired"
    GENESIS_VALIDATED = "genesis_validated"


class LaunchBound(str, Enum):
    """Which side of the launch window a requested time violated."""
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
