"""Error Hierarchy: typed, categorized exceptions for every chain launch failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Integrity errors (hash mismatch, presubmitted gentxs) carry the literal values
      an operator needs: expected/actual hash, gentx count
    - Collaborator exceptions are mapped to one of these at the call site and chained
      with `raise ... from`, so the original cause stays on __cause__
    - to_dict() produces the structured envelope consumed by the outer CLI layer

Design Decisions:
    - Single hierarchy with ChainLaunchError base: callers catch one type and branch on code
      (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and operator handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    INTEGRITY = "integrity"
    EXTERNAL_API = "external_api"
    TRANSACTION = "transaction"
    FILESYSTEM = "filesystem"
    LOCAL_PROCESS = "local_process"
    CONSISTENCY = "consistency"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    launch_id: int | None = None
    step: str | None = None
    debug_info: dict[str, Any] | None = None


class ChainLaunchError(Exception):
    """Base exception for all chainlaunch errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    @property
    def is_integrity_failure(self) -> bool:
        return self.category == ErrorCategory.INTEGRITY

    def to_dict(self) -> dict:
        """Convert to standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "launch_id": self.context.launch_id,
                    "step": self.context.step,
                    "debug_info": self.context.debug_info,
                },
            }
        }


# ─── Launch Timing Errors ───────────────────────────────────────

class OutOfRangeLaunchTimeError(ChainLaunchError):
    """Requested launch time falls outside the inclusive launch window."""
    def __init__(
        self,
        bound: datetime,
        requested: datetime,
        bound_kind: str,
        context: ErrorContext | None = None,
    ):
        relation = "lower than" if bound_kind == "minimum" else "bigger than"
        super().__init__(
            f"launch time {requested.isoformat()} {relation} {bound_kind} {bound.isoformat()}",
            "LAUNCH_TIME_OUT_OF_RANGE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.bound = bound
        self.requested = requested
        self.bound_kind = bound_kind


class InvalidLaunchTimeError(ChainLaunchError):
    """Launch time cannot be compared against the coordinator clock."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_LAUNCH_TIME", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )


# ─── External Collaborator Errors ───────────────────────────────

class ParameterFetchError(ChainLaunchError):
    """Launch params could not be fetched from the network."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Launch params fetch failed: {message}",
            "PARAMETER_FETCH_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context,
        )


class AddressUnresolvedError(ChainLaunchError):
    """Coordinator account has no resolvable on-chain address."""
    def __init__(self, network: str, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Coordinator address for {network} unavailable: {message}",
            "ADDRESS_UNRESOLVED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context,
        )
        self.network = network


class BroadcastError(ChainLaunchError):
    """Transaction broadcast was rejected or failed in transit."""
    def __init__(self, message: str, msg_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"Broadcast of {msg_type} failed: {message}",
            "BROADCAST_FAILED", ErrorCategory.TRANSACTION,
            ErrorSeverity.ERROR, context,
        )
        self.msg_type = msg_type


class ResponseDecodeError(ChainLaunchError):
    """Transaction was broadcast but its response could not be decoded."""
    def __init__(self, message: str, msg_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"Response of {msg_type} could not be decoded: {message}",
            "RESPONSE_DECODE_FAILED", ErrorCategory.TRANSACTION,
            ErrorSeverity.ERROR, context,
        )
        self.msg_type = msg_type


class RemoteFetchError(ChainLaunchError):
    """Remote genesis could not be downloaded or unpacked."""
    def __init__(self, url: str, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Genesis fetch from {url} failed: {message}",
            "REMOTE_FETCH_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context,
        )
        self.url = url


# ─── Local State Errors ─────────────────────────────────────────

class FilesystemError(ChainLaunchError):
    """Filesystem operation under the chain home failed."""
    def __init__(
        self, message: str, operation: str, path: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Filesystem {operation} on {path} failed: {message}",
            "FILESYSTEM_FAILED", ErrorCategory.FILESYSTEM,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation
        self.path = path


class BuildError(ChainLaunchError):
    """Chain binary build failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Chain build failed: {message}",
            "BUILD_FAILED", ErrorCategory.LOCAL_PROCESS,
            ErrorSeverity.ERROR, context,
        )


class LocalInitError(ChainLaunchError):
    """Chain init command failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Chain init failed: {message}",
            "LOCAL_INIT_FAILED", ErrorCategory.LOCAL_PROCESS,
            ErrorSeverity.ERROR, context,
        )


class StaticValidationError(ChainLaunchError):
    """Chain binary rejected the genesis. Message is the binary's own, verbatim."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "STATIC_VALIDATION_FAILED", ErrorCategory.LOCAL_PROCESS,
            ErrorSeverity.ERROR, context,
        )


class GenesisParseError(ChainLaunchError):
    """Genesis file is not valid JSON or lacks the expected structure."""
    def __init__(self, message: str, path: str, context: ErrorContext | None = None):
        super().__init__(
            f"Genesis {path} could not be parsed: {message}",
            "GENESIS_PARSE_FAILED", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.path = path


# ─── Integrity Errors ───────────────────────────────────────────

class GenesisHashMismatchError(ChainLaunchError):
    """Fetched genesis does not match the hash recorded for the chain."""
    def __init__(
        self, expected: str, actual: str, source: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"genesis from URL {source} is invalid. "
            f"expected hash {expected}, actual hash {actual}",
            "GENESIS_HASH_MISMATCH", ErrorCategory.INTEGRITY,
            ErrorSeverity.CRITICAL, context,
        )
        self.expected = expected
        self.actual = actual
        self.source = source


class GenesisContainsPresubmittedTransactionsError(ChainLaunchError):
    """Initial genesis embeds gentxs; those must arrive through requests."""
    def __init__(self, count: int, context: ErrorContext | None = None):
        super().__init__(
            f"the initial genesis for the chain should not contain gentx (found {count})",
            "GENESIS_HAS_GENTXS", ErrorCategory.INTEGRITY,
            ErrorSeverity.CRITICAL, context,
        )
        self.count = count


# ─── Consistency / Cancellation ─────────────────────────────────

class GenesisTimeResetError(ChainLaunchError):
    """Launch was reverted on-chain but the local genesis time is stale."""
    def __init__(self, launch_id: int, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Chain {launch_id} launch was reverted but the genesis time reset failed: "
            f"{message}. Reset the genesis time manually before relaunching.",
            "GENESIS_TIME_RESET_FAILED", ErrorCategory.CONSISTENCY,
            ErrorSeverity.CRITICAL, context,
        )
        self.launch_id = launch_id


class OperationTimeoutError(ChainLaunchError):
    """External step did not finish before its deadline."""
    def __init__(
        self, step: str, timeout_seconds: float | None, context: ErrorContext | None = None,
    ):
        limit = f"within {timeout_seconds}s" if timeout_seconds is not None else "in time"
        super().__init__(
            f"{step} did not complete {limit}",
            "OPERATION_TIMED_OUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.ERROR, context,
        )
        self.step = step
        self.timeout_seconds = timeout_seconds
