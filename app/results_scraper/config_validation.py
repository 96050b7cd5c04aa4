from __future__ import annotations

from dataclasses import replace
from typing import Literal

from .config import ScrapeConfig
from .logging_utils import _scraper_event
from .schemas import SCHEMAS
from .utils import log_line

Entrypoint = Literal["cli", "tests"]

BROWSERS = ("playwright", "selenium")


def _raise_config_error(message: str, *, entrypoint: Entrypoint, error: str) -> None:
    _scraper_event(
        "error",
        phase="config",
        context="runtime_validation",
        error=error,
        entrypoint=entrypoint,
    )
    log_line(f"[CONFIG] {message} (entrypoint={entrypoint})")
    raise ValueError(message)


def validate_scrape_config(cfg: ScrapeConfig, entrypoint: Entrypoint = "cli") -> ScrapeConfig:
    """Validate ``cfg`` and return it, possibly with clamped knobs.

    Raises ``ValueError`` when a blocking misconfiguration is detected. An
    inverted identifier range is not an error; it simply yields an empty run.
    """

    if cfg.schema not in SCHEMAS:
        _raise_config_error(
            f"Unknown output schema {cfg.schema!r}; expected one of {sorted(SCHEMAS)}.",
            entrypoint=entrypoint,
            error="unknown_schema",
        )

    if cfg.browser not in BROWSERS:
        _raise_config_error(
            f"Unknown browser {cfg.browser!r}; expected one of {list(BROWSERS)}.",
            entrypoint=entrypoint,
            error="unknown_browser",
        )

    timeout_fields = [
        ("nav_timeout_seconds", cfg.nav_timeout_seconds),
        ("content_timeout_seconds", cfg.content_timeout_seconds),
        ("page_timeout_seconds", cfg.page_timeout_seconds),
    ]
    for field_name, value in timeout_fields:
        if value <= 0:
            _raise_config_error(
                f"{field_name} must be greater than zero.",
                entrypoint=entrypoint,
                error="invalid_timeout",
            )

    if cfg.delay_seconds < 0 or cfg.post_click_seconds < 0:
        _raise_config_error(
            "delay_seconds and post_click_seconds must be non-negative.",
            entrypoint=entrypoint,
            error="invalid_delay",
        )

    if cfg.max_pages < 1:
        _raise_config_error(
            "max_pages must be at least 1.",
            entrypoint=entrypoint,
            error="invalid_max_pages",
        )

    if cfg.max_attempts < 1:
        _scraper_event(
            "state",
            phase="config",
            context="runtime_validation",
            kind="config_adjustment",
            field="max_attempts",
            value=cfg.max_attempts,
            adjusted=1,
            entrypoint=entrypoint,
        )
        log_line("[CONFIG] max_attempts < 1; clamping to 1.")
        cfg = replace(cfg, max_attempts=1)

    if cfg.end_id > cfg.start_id:
        log_line(
            f"[CONFIG] end_id {cfg.end_id} is above start_id {cfg.start_id}; "
            "no identifiers will be scraped."
        )

    return cfg


__all__ = ["BROWSERS", "Entrypoint", "validate_scrape_config"]
