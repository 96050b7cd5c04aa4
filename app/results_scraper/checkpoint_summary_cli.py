from __future__ import annotations

"""CLI helper for inspecting (and optionally exporting) a checkpoint CSV."""

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Sequence

import pandas as pd

from . import config


@dataclass
class CheckpointSummary:
    path: Path
    rows: int
    events: int
    group_column: str
    first_id: Optional[int] = None
    last_id: Optional[int] = None
    rows_per_event: Dict[str, int] = field(default_factory=dict)


def load_checkpoint(path: Path) -> pd.DataFrame:
    """Read a checkpoint CSV, keeping blank text cells as empty strings."""

    return pd.read_csv(path, keep_default_na=False)


def summarise_checkpoint(path: Path) -> CheckpointSummary:
    """Summarise ``path``; events are keyed by ``event_id`` or, failing that, ``meet``."""

    frame = load_checkpoint(path)
    group_column = "event_id" if "event_id" in frame.columns else "meet"

    counts: Dict[str, int] = {}
    if not frame.empty and group_column in frame.columns:
        grouped = frame.groupby(group_column, sort=False).size()
        counts = {str(key): int(value) for key, value in grouped.items()}

    first_id = last_id = None
    if "id" in frame.columns and not frame.empty:
        first_id = int(frame["id"].min())
        last_id = int(frame["id"].max())

    return CheckpointSummary(
        path=Path(path),
        rows=int(len(frame)),
        events=len(counts),
        group_column=group_column,
        first_id=first_id,
        last_id=last_id,
        rows_per_event=counts,
    )


def export_checkpoint_to_excel(path: Path, dest_path: Optional[Path] = None) -> Path:
    """Write the checkpoint rows and a per-event summary sheet to an xlsx file."""

    frame = load_checkpoint(path)
    summary = summarise_checkpoint(path)
    if dest_path is None:
        config.EXPORTS_DIR.mkdir(parents=True, exist_ok=True)
        dest_path = config.EXPORTS_DIR / f"{Path(path).stem}.xlsx"

    per_event = pd.DataFrame(
        [
            {summary.group_column: key, "count": count}
            for key, count in summary.rows_per_event.items()
        ],
        columns=[summary.group_column, "count"],
    )

    with pd.ExcelWriter(dest_path, engine="openpyxl") as writer:
        frame.to_excel(writer, index=False, sheet_name="Results")
        per_event.to_excel(writer, index=False, sheet_name="Summary_Events")

    return Path(dest_path)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show a summary of a results checkpoint CSV.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Checkpoint CSV to summarise (defaults to the configured output file).",
    )
    parser.add_argument(
        "--xlsx",
        default=None,
        help="Also export the checkpoint and summary to this Excel file.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the checkpoint summary CLI."""

    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    path = Path(args.path) if args.path else config.OUTPUT_FILE
    if not path.exists():
        parser.error(f"Checkpoint {path} does not exist")

    summary = summarise_checkpoint(path)

    print(f"Checkpoint {summary.path}")
    print(f"  rows: {summary.rows}")
    print(f"  events: {summary.events}")
    if summary.first_id is not None:
        print(f"  ids: {summary.first_id}-{summary.last_id}")

    if summary.rows_per_event:
        print(f"\nRows per {summary.group_column}:")
        for key, count in summary.rows_per_event.items():
            print(f"  {key}: {count}")

    if args.xlsx:
        dest = export_checkpoint_to_excel(path, Path(args.xlsx))
        print(f"\nExported to {dest}")

    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
