from pathlib import Path

import pandas as pd
import pytest

from app.results_scraper import checkpoint_summary_cli
from app.results_scraper.checkpoint import CheckpointWriter
from app.results_scraper.models import Event, Record, RunContext


def _write_checkpoint(path: Path) -> Path:
    context = RunContext(id_base=312270)
    context.add_event(
        Event(6836, "Spring Open", "2024-03-03", (Record(name="A"), Record(name="B")))
    )
    context.add_event(Event(6830, "Club Meet", "2024-02-01", (Record(name="Smith, \"Jr.\""),)))
    return CheckpointWriter(path).write(context)


def test_summarise_checkpoint(tmp_path: Path) -> None:
    path = _write_checkpoint(tmp_path / "results.csv")

    summary = checkpoint_summary_cli.summarise_checkpoint(path)

    assert summary.rows == 3
    assert summary.events == 2
    assert (summary.first_id, summary.last_id) == (312270, 312272)
    assert summary.rows_per_event == {"6836": 2, "6830": 1}


def test_cli_prints_summary(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    path = _write_checkpoint(tmp_path / "results.csv")

    assert checkpoint_summary_cli.main([str(path)]) == 0

    out = capsys.readouterr().out
    assert "rows: 3" in out
    assert "ids: 312270-312272" in out
    assert "6830: 1" in out


def test_cli_exports_excel(tmp_path: Path) -> None:
    path = _write_checkpoint(tmp_path / "results.csv")
    dest = tmp_path / "results.xlsx"

    assert checkpoint_summary_cli.main([str(path), "--xlsx", str(dest)]) == 0

    sheets = pd.read_excel(dest, sheet_name=None)
    assert set(sheets) == {"Results", "Summary_Events"}
    assert list(sheets["Results"]["name"]) == ["A", "B", "Smith, \"Jr.\""]


def test_cli_errors_for_missing_checkpoint(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit) as excinfo:
        checkpoint_summary_cli.main([str(tmp_path / "missing.csv")])

    assert excinfo.value.code == 2
    assert "does not exist" in capsys.readouterr().err
