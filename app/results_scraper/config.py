"""Configuration constants for the competition results scraper."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from datetime import date
from pathlib import Path
from typing import Any

DATA_DIR: Path = Path(os.getenv("RESULTS_DATA_DIR", "data"))
LOG_DIR: Path = DATA_DIR / "logs"
LOG_FILE: Path = LOG_DIR / "latest.log"
RUNS_DIR: Path = DATA_DIR / "runs"
EXPORTS_DIR: Path = DATA_DIR / "exports"
OUTPUT_FILE: Path = Path(os.getenv("RESULTS_OUTPUT_FILE", str(DATA_DIR / "results.csv")))

BASE_URL: str = os.getenv(
    "RESULTS_BASE_URL",
    "https://usaweightlifting.sport80.com/public/rankings/results/",
)

USER_AGENT: str = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
)
VIEWPORT: dict[str, int] = {"width": 1920, "height": 1080}


def _parse_int(env_var: str, default: int) -> int:
    try:
        return int(os.getenv(env_var, str(default)))
    except ValueError:
        return default


def _parse_float(env_var: str, default: float) -> float:
    try:
        return float(os.getenv(env_var, str(default)))
    except ValueError:
        return default


def _parse_flag(env_var: str, default: bool) -> bool:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no", "off"}


# Identifier range, walked from START_ID down to END_ID inclusive.
START_ID: int = _parse_int("RESULTS_START_ID", 6836)
END_ID: int = _parse_int("RESULTS_END_ID", 6818)
# First synthetic row id written to the checkpoint.
ID_BASE: int = _parse_int("RESULTS_ID_BASE", 312270)

SCHEMA_DEFAULT: str = os.getenv("RESULTS_SCHEMA", "results").strip().lower() or "results"
BROWSER_DEFAULT: str = os.getenv("RESULTS_BROWSER", "playwright").strip().lower() or "playwright"
HEADLESS: bool = _parse_flag("RESULTS_HEADLESS", True)

# Courtesy pause between identifiers, applied after success and failure alike.
DELAY_SECONDS: float = _parse_float("RESULTS_DELAY_SECONDS", 2.0)

# Timeouts (seconds)
# Navigation timeout for each results page load.
NAV_TIMEOUT_SECONDS: float = _parse_float("RESULTS_NAV_TIMEOUT_SECONDS", 30)
# Probe for the first table rows after navigation; a miss skips the identifier.
CONTENT_TIMEOUT_SECONDS: float = _parse_float("RESULTS_CONTENT_TIMEOUT_SECONDS", 5)
# Wait for the next page of a table after clicking "Next page".
PAGE_TIMEOUT_SECONDS: float = _parse_float("RESULTS_PAGE_TIMEOUT_SECONDS", 30)
POST_CLICK_SECONDS: float = _parse_float("RESULTS_POST_CLICK_SECONDS", 1.0)

MAX_PAGES: int = _parse_int("RESULTS_MAX_PAGES", 200)
MAX_ATTEMPTS: int = _parse_int("RESULTS_MAX_ATTEMPTS", 1)


@dataclass(frozen=True)
class ScrapeConfig:
    """Settings for a single range scrape.

    ``start_id`` and ``end_id`` bound the identifier range (walked in
    descending order). ``schema`` selects the checkpoint column layout and
    ``browser`` the concrete data source.
    """

    start_id: int = START_ID
    end_id: int = END_ID
    id_base: int = ID_BASE
    output_path: Path = OUTPUT_FILE
    schema: str = SCHEMA_DEFAULT
    browser: str = BROWSER_DEFAULT
    headless: bool = HEADLESS
    base_url: str = BASE_URL
    delay_seconds: float = DELAY_SECONDS
    nav_timeout_seconds: float = NAV_TIMEOUT_SECONDS
    content_timeout_seconds: float = CONTENT_TIMEOUT_SECONDS
    page_timeout_seconds: float = PAGE_TIMEOUT_SECONDS
    post_click_seconds: float = POST_CLICK_SECONDS
    max_pages: int = MAX_PAGES
    max_attempts: int = MAX_ATTEMPTS

    @classmethod
    def from_env(cls, **overrides: Any) -> "ScrapeConfig":
        """Snapshot the module-level settings, applying non-``None`` overrides."""

        cfg = cls(
            start_id=START_ID,
            end_id=END_ID,
            id_base=ID_BASE,
            output_path=OUTPUT_FILE,
            schema=SCHEMA_DEFAULT,
            browser=BROWSER_DEFAULT,
            headless=HEADLESS,
            base_url=BASE_URL,
            delay_seconds=DELAY_SECONDS,
            nav_timeout_seconds=NAV_TIMEOUT_SECONDS,
            content_timeout_seconds=CONTENT_TIMEOUT_SECONDS,
            page_timeout_seconds=PAGE_TIMEOUT_SECONDS,
            post_click_seconds=POST_CLICK_SECONDS,
            max_pages=MAX_PAGES,
            max_attempts=MAX_ATTEMPTS,
        )
        changes = {key: value for key, value in overrides.items() if value is not None}
        if "output_path" in changes:
            changes["output_path"] = Path(changes["output_path"])
        return replace(cfg, **changes) if changes else cfg

    def identifiers(self) -> range:
        """Return identifiers from ``start_id`` down to ``end_id`` inclusive."""

        return range(self.start_id, self.end_id - 1, -1)

    def event_url(self, identifier: int) -> str:
        return f"{self.base_url.rstrip('/')}/{identifier}"


def today_iso() -> str:
    """Return today's date as ``YYYY-MM-DD`` (fallback event date)."""

    return date.today().isoformat()
