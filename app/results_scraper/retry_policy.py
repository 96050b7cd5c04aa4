from __future__ import annotations

from typing import Optional

from .error_codes import ErrorCode
from .logging_utils import _scraper_event

RETRYABLE_ERROR_CODES = {
    ErrorCode.NAVIGATION,
}

NON_RETRYABLE_ERROR_CODES = {
    ErrorCode.CONTENT_TIMEOUT,
    ErrorCode.PAGINATION_TIMEOUT,
    ErrorCode.NO_RESULTS,
    # Run-scoped and fatal; never handled per identifier.
    ErrorCode.SINK_WRITE,
    ErrorCode.INTERNAL,
}


def compute_backoff_seconds(attempt_index: int) -> float:
    """Return a capped exponential backoff for the given attempt (1-based)."""

    return float(min(2 ** max(0, attempt_index - 1), 30))


def decide_retry(
    attempt_index: int,
    max_attempts: int,
    *,
    error_code: Optional[str] = None,
    identifier: Optional[int] = None,
) -> bool:
    """Decide whether a failed identifier attempt should be retried."""

    code = (error_code or "").strip()

    if attempt_index >= max_attempts:
        kind, will_retry = "capped", False
    elif code in RETRYABLE_ERROR_CODES:
        kind, will_retry = "retryable", True
    elif code in NON_RETRYABLE_ERROR_CODES:
        kind, will_retry = "non_retryable", False
    else:
        kind, will_retry = ("unknown" if code else "missing_error_code"), False

    _scraper_event(
        "state",
        phase="retry_decision",
        kind=kind,
        identifier=identifier,
        error_code=code or None,
        attempt=attempt_index,
        max_attempts=max_attempts,
        will_retry=will_retry,
    )
    return will_retry


__all__ = [
    "NON_RETRYABLE_ERROR_CODES",
    "RETRYABLE_ERROR_CODES",
    "compute_backoff_seconds",
    "decide_retry",
]
