import pytest

from app.results_scraper.checkpoint import CheckpointWriteError
from app.results_scraper.error_codes import ErrorCode, classify_exception
from app.results_scraper.pagination import PaginationTimeoutError
from app.results_scraper.sources import NavigationError


@pytest.mark.parametrize(
    "exc, expected",
    [
        (NavigationError("dns"), ErrorCode.NAVIGATION),
        (PaginationTimeoutError(3, 30), ErrorCode.PAGINATION_TIMEOUT),
        (CheckpointWriteError("disk full"), ErrorCode.SINK_WRITE),
        (KeyError("cells"), ErrorCode.INTERNAL),
    ],
)
def test_classify_exception(exc: BaseException, expected: str) -> None:
    assert classify_exception(exc) == expected


def test_pagination_timeout_message_names_page() -> None:
    assert str(PaginationTimeoutError(3, 30)) == "Page 3 did not become ready within 30s"
