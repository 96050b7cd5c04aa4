"""Playwright-backed data source for the Sport80 rankings results pages.

Each identifier maps to ``<base_url>/<identifier>``. The page renders a
paginated results table client-side; rows are handed to the extractor as
``outerHTML`` strings so all cell parsing stays out of the browser.
"""

from __future__ import annotations

from typing import List, Optional

from playwright.sync_api import (
    Browser,
    BrowserContext,
    Error as PWError,
    Page,
    Playwright,
    TimeoutError as PWTimeout,
    sync_playwright,
)

from . import config
from .config import ScrapeConfig
from .logging_utils import _scraper_event
from .selectors_sport80 import SPORT80_SELECTORS, Sport80Selectors
from .sources import NavigationError, PageAdvanceError
from .utils import log_line


def wait_seconds(page: Optional[Page], seconds: float) -> None:
    """Wait safely for ``seconds`` only if *page* remains open."""

    if page is None:
        return

    if seconds is None or seconds <= 0:
        return

    if not page.is_closed():
        page.wait_for_timeout(int(seconds * 1000))


def _first_text(page: Page, selector: str) -> Optional[str]:
    try:
        element = page.query_selector(selector)
        if element is None:
            return None
        text = (element.text_content() or "").strip()
    except PWError as exc:
        log_line(f"[PLAYWRIGHT] Unable to read {selector!r}: {exc}")
        return None
    return text or None


class PlaywrightDocument:
    """A loaded results page."""

    def __init__(
        self,
        page: Page,
        *,
        selectors: Sport80Selectors = SPORT80_SELECTORS,
        post_click_seconds: float = config.POST_CLICK_SECONDS,
    ) -> None:
        self.page = page
        self.selectors = selectors
        self.post_click_seconds = post_click_seconds

    def await_ready(self, timeout_s: float) -> bool:
        # Either rows or the site's error banner ends the wait; only rows count.
        combined = f"{self.selectors.row_selector}, {self.selectors.error_selector}"
        try:
            self.page.wait_for_selector(combined, timeout=timeout_s * 1000)
        except PWTimeout:
            return False
        return self.page.query_selector(self.selectors.row_selector) is not None

    def current_page_rows(self) -> List[str]:
        return self.page.eval_on_selector_all(
            self.selectors.row_selector,
            "rows => rows.map(row => row.outerHTML)",
        )

    def has_next_page(self) -> bool:
        return self.page.query_selector(self.selectors.next_button) is not None

    def advance_page(self, timeout_s: float) -> None:
        button = self.page.query_selector(self.selectors.next_button)
        if button is None:
            return
        try:
            button.click(timeout=timeout_s * 1000)
        except PWTimeout as exc:
            raise PageAdvanceError(
                f"Next page click timed out after {timeout_s:g}s: {exc}"
            ) from exc
        except PWError as exc:
            raise PageAdvanceError(f"Next page click failed: {exc}") from exc
        wait_seconds(self.page, self.post_click_seconds)

    def read_event_name(self) -> Optional[str]:
        return _first_text(self.page, self.selectors.event_name)

    def read_event_date(self) -> Optional[str]:
        return _first_text(self.page, self.selectors.event_date)


class PlaywrightDataSource:
    """Headless Chromium session reused across identifiers.

    Use as a context manager; the browser is closed on exit.
    """

    def __init__(
        self, cfg: ScrapeConfig, selectors: Sport80Selectors = SPORT80_SELECTORS
    ) -> None:
        self.cfg = cfg
        self.selectors = selectors
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    def __enter__(self) -> "PlaywrightDataSource":
        log_line("Launching browser...")
        self._playwright = sync_playwright().start()
        try:
            self._browser = self._playwright.chromium.launch(headless=self.cfg.headless)
            self._context = self._browser.new_context(
                viewport=config.VIEWPORT,
                user_agent=config.USER_AGENT,
            )
            self._page = self._context.new_page()
        except BaseException:
            self.close()
            raise
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        for closer in (self._context, self._browser):
            if closer is None:
                continue
            try:
                closer.close()
            except PWError as exc:
                log_line(f"[PLAYWRIGHT] Error while closing browser: {exc}")
        if self._playwright is not None:
            self._playwright.stop()
        self._playwright = self._browser = self._context = self._page = None

    def resolve_document(self, identifier: int) -> PlaywrightDocument:
        if self._page is None:
            raise RuntimeError("PlaywrightDataSource used outside its context manager")

        url = self.cfg.event_url(identifier)
        _scraper_event("nav", step="goto", identifier=identifier, url=url)
        try:
            self._page.goto(
                url,
                wait_until="networkidle",
                timeout=self.cfg.nav_timeout_seconds * 1000,
            )
        except PWTimeout as exc:
            raise NavigationError(f"goto({url!r}) timed out: {exc}") from exc
        except PWError as exc:
            raise NavigationError(f"goto({url!r}) failed: {exc}") from exc

        return PlaywrightDocument(
            self._page,
            selectors=self.selectors,
            post_click_seconds=self.cfg.post_click_seconds,
        )


__all__ = ["PlaywrightDataSource", "PlaywrightDocument", "wait_seconds"]
