from __future__ import annotations

"""Checkpoint column layouts.

Each schema is an ordered list of ``(header, field)`` pairs. ``field`` names a
:class:`~app.results_scraper.models.Record` attribute, or one of the row-level
values ``row_id`` / ``event_id`` added during flattening. Header names are
persisted by downstream imports and should be treated as stable.
"""

from dataclasses import dataclass
from typing import Tuple

ROW_ID = "row_id"
EVENT_ID = "event_id"


@dataclass(frozen=True)
class OutputSchema:
    name: str
    columns: Tuple[Tuple[str, str], ...]
    normalize_dates: bool = True

    @property
    def header(self) -> Tuple[str, ...]:
        return tuple(header for header, _ in self.columns)


RESULTS = OutputSchema(
    name="results",
    columns=(
        ("id", ROW_ID),
        ("event_id", EVENT_ID),
        ("meet", "meet"),
        ("date", "date"),
        ("name", "name"),
        ("age", "age"),
        ("body_weight", "body_weight"),
        ("snatch1", "snatch1"),
        ("snatch2", "snatch2"),
        ("snatch3", "snatch3"),
        ("snatch_best", "snatch_best"),
        ("cj1", "cj1"),
        ("cj2", "cj2"),
        ("cj3", "cj3"),
        ("cj_best", "cj_best"),
        ("total", "total"),
    ),
)

# Layout of the older age-data exports: no row ids and dates kept as rendered.
AGE_DATA = OutputSchema(
    name="age_data",
    columns=(
        ("meet", "meet"),
        ("date", "date"),
        ("lifter", "name"),
        ("age", "age"),
        ("bodyWeight", "body_weight"),
        ("snatch1", "snatch1"),
        ("snatch2", "snatch2"),
        ("snatch3", "snatch3"),
        ("snatch", "snatch_best"),
        ("cj1", "cj1"),
        ("cj2", "cj2"),
        ("cj3", "cj3"),
        ("cj", "cj_best"),
        ("total", "total"),
    ),
    normalize_dates=False,
)

SCHEMAS = {schema.name: schema for schema in (RESULTS, AGE_DATA)}
DEFAULT_SCHEMA = RESULTS.name


def get_schema(name: str | None) -> OutputSchema:
    """Return the schema registered under ``name``.

    Raises ``ValueError`` for unknown names so misconfiguration fails before
    the browser starts.
    """

    key = (name or DEFAULT_SCHEMA).strip().lower()
    try:
        return SCHEMAS[key]
    except KeyError:
        raise ValueError(
            f"Unknown output schema {name!r}; expected one of {sorted(SCHEMAS)}"
        ) from None


__all__ = [
    "AGE_DATA",
    "DEFAULT_SCHEMA",
    "EVENT_ID",
    "OutputSchema",
    "RESULTS",
    "ROW_ID",
    "SCHEMAS",
    "get_schema",
]
