"""Map raw result table rows onto :class:`Record` objects.

A raw row is either the HTML of one ``<tr>`` (as read from the live page) or
an already split sequence of cell texts. Extraction is a pure transform and
never raises: absent or malformed cells fall back to ``""`` / ``0.0`` per
field, and a row that cannot be read at all becomes an all-default record.
"""
from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence, Union

from bs4 import BeautifulSoup

from .logging_utils import _scraper_event
from .models import NUMERIC_FIELDS, TEXT_FIELDS, Record
from .selectors_sport80 import RESULTS_TABLE_LAYOUT, ResultsTableLayout

RawRow = Union[str, Sequence[Optional[str]]]

# Leading numeric prefix, so "105kg" reads as 105 and "-110" keeps its sign.
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(raw: Optional[str]) -> float:
    """Return the leading number in ``raw`` or ``0.0`` when there is none."""

    if raw is None:
        return 0.0
    match = _LEADING_NUMBER.match(str(raw).strip())
    if not match:
        return 0.0
    try:
        value = float(match.group(0))
    except ValueError:
        return 0.0
    if value != value or value in (float("inf"), float("-inf")):
        return 0.0
    return value


def parse_text(raw: Optional[str]) -> str:
    if raw is None:
        return ""
    return str(raw).strip()


def row_cells(row: RawRow) -> List[Optional[str]]:
    """Return the cell texts of ``row`` in document order."""

    if isinstance(row, str):
        soup = BeautifulSoup(row, "html.parser")
        return [cell.get_text() for cell in soup.find_all("td")]
    return [None if cell is None else str(cell) for cell in row]


def _cell(cells: Sequence[Optional[str]], index: int) -> Optional[str]:
    if 0 <= index < len(cells):
        return cells[index]
    return None


def extract_record(row: RawRow, layout: ResultsTableLayout = RESULTS_TABLE_LAYOUT) -> Record:
    """Build one :class:`Record` from ``row`` using the positional ``layout``."""

    try:
        cells = row_cells(row)
    except Exception as exc:  # noqa: BLE001
        _scraper_event("extract", step="row_unreadable", error=repr(exc))
        return Record()

    values = {}
    for name in TEXT_FIELDS:
        values[name] = parse_text(_cell(cells, getattr(layout, name)))
    for name in NUMERIC_FIELDS:
        values[name] = parse_number(_cell(cells, getattr(layout, name)))
    return Record(**values)


def extract_records(
    rows: Iterable[RawRow], layout: ResultsTableLayout = RESULTS_TABLE_LAYOUT
) -> List[Record]:
    """Extract every row of one page, preserving encounter order."""

    return [extract_record(row, layout) for row in rows]


__all__ = [
    "RawRow",
    "extract_record",
    "extract_records",
    "parse_number",
    "parse_text",
    "row_cells",
]
