from __future__ import annotations

"""Error code taxonomy for per-identifier scrape failures.

Codes appear in structured logs and run telemetry so a run summary can explain
why an identifier was skipped or failed. Keep them stable for reporting.
"""


class ErrorCode:
    NAVIGATION = "navigation_error"
    CONTENT_TIMEOUT = "content_timeout"
    PAGINATION_TIMEOUT = "pagination_timeout"
    NO_RESULTS = "no_results"
    SINK_WRITE = "sink_write_failed"
    INTERNAL = "internal_error"


class ScraperError(Exception):
    """Base class for scraper failures that carry an :class:`ErrorCode`."""

    error_code: str = ErrorCode.INTERNAL


def classify_exception(exc: BaseException) -> str:
    """Return the error code for ``exc``; unknown exceptions are internal."""

    code = getattr(exc, "error_code", None)
    if isinstance(code, str) and code:
        return code
    return ErrorCode.INTERNAL


__all__ = ["ErrorCode", "ScraperError", "classify_exception"]
