from __future__ import annotations

import pytest

from app.results_scraper import retry_policy
from app.results_scraper.error_codes import ErrorCode


@pytest.fixture
def event_recorder(monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, dict]]:
    events: list[tuple[str, dict]] = []

    def _record(event_phase: str, **fields: object) -> None:
        events.append((event_phase, fields))

    monkeypatch.setattr(retry_policy, "_scraper_event", _record)
    return events


@pytest.mark.parametrize(
    "attempt, max_attempts, expected, kind",
    [
        (1, 3, True, "retryable"),
        (2, 3, True, "retryable"),
        (3, 3, False, "capped"),
        (1, 1, False, "capped"),
    ],
)
def test_navigation_errors_retry_until_capped(
    attempt: int,
    max_attempts: int,
    expected: bool,
    kind: str,
    event_recorder: list[tuple[str, dict]],
) -> None:
    result = retry_policy.decide_retry(
        attempt, max_attempts, error_code=ErrorCode.NAVIGATION, identifier=42
    )
    assert result is expected
    assert len(event_recorder) == 1
    phase, fields = event_recorder[0]
    assert phase == "state"
    assert fields["phase"] == "retry_decision"
    assert fields["kind"] == kind
    assert fields["identifier"] == 42
    assert fields["will_retry"] is expected


@pytest.mark.parametrize(
    "error_code",
    [ErrorCode.CONTENT_TIMEOUT, ErrorCode.PAGINATION_TIMEOUT, ErrorCode.SINK_WRITE],
)
def test_non_retryable_error_codes(error_code: str, event_recorder: list[tuple[str, dict]]) -> None:
    assert error_code in retry_policy.NON_RETRYABLE_ERROR_CODES
    assert retry_policy.decide_retry(1, 5, error_code=error_code) is False
    _, fields = event_recorder[0]
    assert fields["kind"] == "non_retryable"


@pytest.mark.parametrize(
    "error_code, expected_kind",
    [("", "missing_error_code"), (None, "missing_error_code"), ("odd", "unknown")],
)
def test_missing_or_unknown_error_codes(
    error_code: str | None, expected_kind: str, event_recorder: list[tuple[str, dict]]
) -> None:
    assert retry_policy.decide_retry(1, 5, error_code=error_code) is False
    _, fields = event_recorder[0]
    assert fields["kind"] == expected_kind


@pytest.mark.parametrize("attempt, expected", [(1, 1.0), (2, 2.0), (3, 4.0), (10, 30.0)])
def test_backoff_is_capped(attempt: int, expected: float) -> None:
    assert retry_policy.compute_backoff_seconds(attempt) == expected
