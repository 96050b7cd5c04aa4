"""Checkpoint CSV writer.

Every checkpoint is a full snapshot of the run's accumulated events, flattened
to one row per record with synthetic row ids counted from the run's
``id_base``. The destination file is replaced atomically, so a reader (or a
crash) only ever sees a complete previous or complete current snapshot.
"""
from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any, Iterator, List

from .date_utils import normalize_date
from .error_codes import ErrorCode, ScraperError
from .logging_utils import _scraper_event
from .models import NUMERIC_FIELDS, Event, Record, RunContext
from .schemas import EVENT_ID, RESULTS, ROW_ID, OutputSchema
from .utils import atomic_write_text, log_line


class CheckpointWriteError(ScraperError):
    """Raised when the checkpoint file cannot be replaced."""

    error_code = ErrorCode.SINK_WRITE


def format_number(value: float) -> str:
    """Render a numeric field without a trailing ``.0`` for whole numbers."""

    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _field_value(
    field: str, row_id: int, event: Event, record: Record, schema: OutputSchema
) -> Any:
    if field == ROW_ID:
        return row_id
    if field == EVENT_ID:
        return event.identifier
    value = getattr(record, field)
    if field in NUMERIC_FIELDS:
        return format_number(value)
    if field == "date" and schema.normalize_dates:
        return normalize_date(value)
    return value


def iter_rows(context: RunContext, schema: OutputSchema = RESULTS) -> Iterator[List[Any]]:
    """Yield data rows for ``context`` in schema column order."""

    for row_id, event, record in context.numbered_records():
        yield [
            _field_value(field, row_id, event, record, schema)
            for _, field in schema.columns
        ]


def render_csv(context: RunContext, schema: OutputSchema = RESULTS) -> str:
    """Return the checkpoint text: header line plus one line per record.

    Fields are quoted only when they contain a comma, a double quote or a
    line break; embedded quotes are doubled.
    """

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(schema.header)
    writer.writerows(iter_rows(context, schema))
    return buffer.getvalue()


class CheckpointWriter:
    """Write run snapshots to ``path`` using ``schema``."""

    def __init__(self, path: Path, schema: OutputSchema = RESULTS) -> None:
        self.path = Path(path)
        self.schema = schema

    def write(self, context: RunContext) -> Path:
        content = render_csv(context, self.schema)
        try:
            atomic_write_text(self.path, content)
        except OSError as exc:
            _scraper_event(
                "error",
                phase="checkpoint",
                path=str(self.path),
                error_code=ErrorCode.SINK_WRITE,
                error=str(exc),
            )
            raise CheckpointWriteError(
                f"Unable to write checkpoint {self.path}: {exc}"
            ) from exc

        log_line(
            f"[CHECKPOINT] Saved {context.record_count} results from "
            f"{len(context.events)} events to {self.path}"
        )
        return self.path


__all__ = [
    "CheckpointWriteError",
    "CheckpointWriter",
    "format_number",
    "iter_rows",
    "render_csv",
]
