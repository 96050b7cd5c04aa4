"""Data source contract consumed by the range driver.

Concrete sources (Playwright, Selenium) own the browser and every selector;
the driver and pagination walker only see these methods. Timeouts are in
seconds.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .error_codes import ErrorCode, ScraperError
from .extractor import RawRow


class NavigationError(ScraperError):
    """Raised when a results page cannot be loaded."""

    error_code = ErrorCode.NAVIGATION


class PageAdvanceError(ScraperError):
    """Raised when the next-page control cannot be activated in time."""

    error_code = ErrorCode.PAGINATION_TIMEOUT


class SourceDocument(Protocol):
    """One paginated results table."""

    def await_ready(self, timeout_s: float) -> bool:
        """Return ``True`` once rows are visible, ``False`` after ``timeout_s``."""

    def current_page_rows(self) -> Sequence[RawRow]:
        """Return the raw rows of the page currently shown."""

    def has_next_page(self) -> bool:
        """Return ``True`` when an enabled next-page control is present."""

    def advance_page(self, timeout_s: float) -> None:
        """Activate the next-page control.

        Raises :class:`PageAdvanceError` when the control cannot be clicked.
        """

    def read_event_name(self) -> Optional[str]:
        """Best-effort event title, ``None`` when the page has none."""

    def read_event_date(self) -> Optional[str]:
        """Best-effort event date, ``None`` when the page has none."""


class DataSource(Protocol):
    def resolve_document(self, identifier: int) -> SourceDocument:
        """Load the results page for ``identifier``.

        Raises :class:`NavigationError` (or a browser error) on failure.
        """


__all__ = ["DataSource", "NavigationError", "PageAdvanceError", "SourceDocument"]
