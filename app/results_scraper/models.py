"""Records, events and the run-scoped accumulator."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

NUMERIC_FIELDS: Tuple[str, ...] = (
    "body_weight",
    "snatch1",
    "snatch2",
    "snatch3",
    "snatch_best",
    "cj1",
    "cj2",
    "cj3",
    "cj_best",
    "total",
)
TEXT_FIELDS: Tuple[str, ...] = ("meet", "date", "name", "age")


@dataclass(frozen=True)
class Record:
    """One lifter's result row.

    Text fields default to ``""`` and numeric fields to ``0.0`` so a row with
    missing cells is still a complete record.
    """

    meet: str = ""
    date: str = ""
    name: str = ""
    age: str = ""
    body_weight: float = 0.0
    snatch1: float = 0.0
    snatch2: float = 0.0
    snatch3: float = 0.0
    snatch_best: float = 0.0
    cj1: float = 0.0
    cj2: float = 0.0
    cj3: float = 0.0
    cj_best: float = 0.0
    total: float = 0.0


@dataclass(frozen=True)
class Event:
    """Records scraped from one results identifier."""

    identifier: int
    name: str
    date: str
    records: Tuple[Record, ...] = ()


@dataclass
class RunContext:
    """State owned by a single range run.

    ``events`` only grows; the checkpoint writer reads it but never mutates
    it. ``id_base`` is the synthetic row id given to the first flattened
    record.
    """

    id_base: int
    events: List[Event] = field(default_factory=list)
    checkpoints_written: int = 0

    def add_event(self, event: Event) -> None:
        self.events.append(event)

    @property
    def record_count(self) -> int:
        return sum(len(event.records) for event in self.events)

    def numbered_records(self) -> Iterator[Tuple[int, Event, Record]]:
        """Yield ``(row_id, event, record)`` in accumulator order."""

        row_id = self.id_base
        for event in self.events:
            for record in event.records:
                yield row_id, event, record
                row_id += 1


__all__ = ["Event", "NUMERIC_FIELDS", "Record", "RunContext", "TEXT_FIELDS"]
