from __future__ import annotations

"""Selectors and column layout for the Sport80 rankings results pages."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Sport80Selectors:
    """CSS hooks for a results page.

    The results table is a paginated Vuetify data table. Rows are read from
    ``row_selector``; the pager exposes a "Next page" button that carries the
    ``disabled`` attribute on the last page.
    """

    row_selector: str = "table tbody tr"
    error_selector: str = ".error-message"
    next_button: str = 'button[aria-label="Next page"]:not([disabled])'
    event_name: str = "h1, .event-title, .page-title"
    event_date: str = "time, .event-date, .date"


@dataclass(frozen=True)
class ResultsTableLayout:
    """Positional cell index for each record field.

    The best-lift columns sit after the three clean & jerk attempts, so the
    indices are not in field declaration order.
    """

    meet: int = 0
    date: int = 1
    age: int = 2
    name: int = 3
    body_weight: int = 4
    snatch1: int = 5
    snatch2: int = 6
    snatch3: int = 7
    cj1: int = 8
    cj2: int = 9
    cj3: int = 10
    snatch_best: int = 11
    cj_best: int = 12
    total: int = 13


SPORT80_SELECTORS = Sport80Selectors()
RESULTS_TABLE_LAYOUT = ResultsTableLayout()

__all__ = [
    "RESULTS_TABLE_LAYOUT",
    "ResultsTableLayout",
    "SPORT80_SELECTORS",
    "Sport80Selectors",
]
