"""Error Hierarchy: tests for codes, categories and the structured envelope."""

from datetime import datetime, timezone

from chainlaunch.core.errors import (
    ChainLaunchError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    GenesisContainsPresubmittedTransactionsError,
    GenesisTimeResetError,
    OperationTimeoutError,
    OutOfRangeLaunchTimeError,
    StaticValidationError,
)


def test_to_dict_envelope():
    ctx = ErrorContext(launch_id=3, step="validate_genesis")
    err = StaticValidationError("error: invalid genesis file", ctx)
    payload = err.to_dict()["error"]
    assert payload["code"] == "STATIC_VALIDATION_FAILED"
    assert payload["message"] == "error: invalid genesis file"
    assert payload["category"] == "local_process"
    assert payload["context"]["launch_id"] == 3
    assert payload["context"]["step"] == "validate_genesis"


def test_gentx_error_carries_count_and_is_integrity():
    err = GenesisContainsPresubmittedTransactionsError(4)
    assert err.count == 4
    assert "found 4" in err.message
    assert err.is_integrity_failure
    assert err.severity == ErrorSeverity.CRITICAL


def test_all_errors_share_base():
    bound = datetime(2026, 1, 1, tzinfo=timezone.utc)
    for err in (
        OutOfRangeLaunchTimeError(bound, bound, "minimum"),
        GenesisTimeResetError(1, "disk full"),
        OperationTimeoutError("build", 5.0),
    ):
        assert isinstance(err, ChainLaunchError)
        assert not err.is_integrity_failure


def test_genesis_time_reset_error_asks_for_manual_reset():
    err = GenesisTimeResetError(9, "disk full")
    assert err.category == ErrorCategory.CONSISTENCY
    assert "reverted" in err.message
    assert "manually" in err.message


def test_timeout_without_limit():
    assert OperationTimeoutError("fetch_genesis", None).message == "fetch_genesis did not complete in time"
