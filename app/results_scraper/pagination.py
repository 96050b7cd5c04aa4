from __future__ import annotations

from typing import List

from . import config
from .error_codes import ErrorCode, ScraperError
from .extractor import extract_records
from .logging_utils import _scraper_event
from .models import Record
from .selectors_sport80 import RESULTS_TABLE_LAYOUT, ResultsTableLayout
from .sources import SourceDocument


class PaginationTimeoutError(ScraperError):
    """Raised when the next page of a table does not render in time."""

    error_code = ErrorCode.PAGINATION_TIMEOUT

    def __init__(self, page_number: int, timeout_s: float) -> None:
        super().__init__(
            f"Page {page_number} did not become ready within {timeout_s:g}s"
        )
        self.page_number = page_number
        self.timeout_s = timeout_s


def walk_all_pages(
    document: SourceDocument,
    *,
    max_pages: int = config.MAX_PAGES,
    page_timeout: float = config.PAGE_TIMEOUT_SECONDS,
    layout: ResultsTableLayout = RESULTS_TABLE_LAYOUT,
    identifier: int | None = None,
) -> List[Record]:
    """Extract every page of ``document`` in order.

    The current page is read first; while an enabled next-page control
    exists the document is advanced and awaited for at most ``page_timeout``
    seconds. A page that never renders raises :class:`PaginationTimeoutError`.
    Reading stops after ``max_pages`` pages even if the source still offers a
    next page.
    """

    results: List[Record] = []
    page_number = 1

    while True:
        page_records = extract_records(document.current_page_rows(), layout)
        results.extend(page_records)
        _scraper_event(
            "page",
            identifier=identifier,
            page=page_number,
            rows=len(page_records),
        )

        if not document.has_next_page():
            break

        if page_number >= max_pages:
            _scraper_event(
                "page",
                phase="page_cap_reached",
                identifier=identifier,
                max_pages=max_pages,
                rows=len(results),
            )
            break

        document.advance_page(page_timeout)
        page_number += 1
        if not document.await_ready(page_timeout):
            raise PaginationTimeoutError(page_number, page_timeout)

    return results


__all__ = ["PaginationTimeoutError", "walk_all_pages"]
