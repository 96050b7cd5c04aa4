"""Selenium data source, an alternative to the Playwright backend."""
from __future__ import annotations

import os
import time
from typing import List, Optional

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from . import config
from .config import ScrapeConfig
from .logging_utils import _scraper_event
from .selectors_sport80 import SPORT80_SELECTORS, Sport80Selectors
from .sources import NavigationError, PageAdvanceError
from .utils import log_line


def make_driver(headless: bool = True) -> WebDriver:
    """Instantiate a Chrome WebDriver sized like the Playwright viewport."""

    chrome_options = Options()
    binary = os.getenv("RESULTS_CHROME_BINARY")
    if binary:
        chrome_options.binary_location = binary
    if headless:
        chrome_options.add_argument("--headless=new")
    chrome_options.add_argument("--disable-gpu")
    chrome_options.add_argument("--no-sandbox")
    chrome_options.add_argument("--disable-dev-shm-usage")
    chrome_options.add_argument(
        f"--window-size={config.VIEWPORT['width']},{config.VIEWPORT['height']}"
    )
    chrome_options.add_argument(f"--user-agent={config.USER_AGENT}")
    return webdriver.Chrome(options=chrome_options)


class SeleniumDocument:
    def __init__(
        self,
        driver: WebDriver,
        *,
        selectors: Sport80Selectors = SPORT80_SELECTORS,
        post_click_seconds: float = config.POST_CLICK_SECONDS,
    ) -> None:
        self.driver = driver
        self.selectors = selectors
        self.post_click_seconds = post_click_seconds

    def await_ready(self, timeout_s: float) -> bool:
        combined = f"{self.selectors.row_selector}, {self.selectors.error_selector}"
        try:
            WebDriverWait(self.driver, timeout_s).until(
                EC.presence_of_element_located((By.CSS_SELECTOR, combined))
            )
        except TimeoutException:
            return False
        return bool(self.driver.find_elements(By.CSS_SELECTOR, self.selectors.row_selector))

    def current_page_rows(self) -> List[str]:
        return [
            row.get_attribute("outerHTML") or ""
            for row in self.driver.find_elements(By.CSS_SELECTOR, self.selectors.row_selector)
        ]

    def has_next_page(self) -> bool:
        return bool(self.driver.find_elements(By.CSS_SELECTOR, self.selectors.next_button))

    def advance_page(self, timeout_s: float) -> None:
        try:
            button = WebDriverWait(self.driver, timeout_s).until(
                EC.element_to_be_clickable((By.CSS_SELECTOR, self.selectors.next_button))
            )
            button.click()
        except TimeoutException as exc:
            raise PageAdvanceError(
                f"Next page not clickable within {timeout_s:g}s"
            ) from exc
        except WebDriverException as exc:
            raise PageAdvanceError(f"Next page click failed: {exc.msg}") from exc
        if self.post_click_seconds > 0:
            time.sleep(self.post_click_seconds)

    def _first_text(self, selector: str) -> Optional[str]:
        elements = self.driver.find_elements(By.CSS_SELECTOR, selector)
        if not elements:
            return None
        text = (elements[0].get_attribute("textContent") or "").strip()
        return text or None

    def read_event_name(self) -> Optional[str]:
        return self._first_text(self.selectors.event_name)

    def read_event_date(self) -> Optional[str]:
        return self._first_text(self.selectors.event_date)


class SeleniumDataSource:
    def __init__(
        self, cfg: ScrapeConfig, selectors: Sport80Selectors = SPORT80_SELECTORS
    ) -> None:
        self.cfg = cfg
        self.selectors = selectors
        self.driver: Optional[WebDriver] = None

    def __enter__(self) -> "SeleniumDataSource":
        log_line("Launching Chrome WebDriver...")
        self.driver = make_driver(headless=self.cfg.headless)
        self.driver.set_page_load_timeout(self.cfg.nav_timeout_seconds)
        return self

    def __exit__(self, *exc_info) -> None:
        if self.driver is not None:
            try:
                self.driver.quit()
            except WebDriverException as exc:
                log_line(f"[SELENIUM] Error while quitting driver: {exc}")
            self.driver = None

    def resolve_document(self, identifier: int) -> SeleniumDocument:
        if self.driver is None:
            raise RuntimeError("SeleniumDataSource used outside its context manager")

        url = self.cfg.event_url(identifier)
        _scraper_event("nav", step="get", identifier=identifier, url=url)
        try:
            self.driver.get(url)
        except TimeoutException as exc:
            raise NavigationError(f"get({url!r}) timed out: {exc.msg}") from exc
        except WebDriverException as exc:
            raise NavigationError(f"get({url!r}) failed: {exc.msg}") from exc

        return SeleniumDocument(
            self.driver,
            selectors=self.selectors,
            post_click_seconds=self.cfg.post_click_seconds,
        )


__all__ = ["SeleniumDataSource", "SeleniumDocument", "make_driver"]
