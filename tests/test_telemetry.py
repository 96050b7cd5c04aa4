import json
from pathlib import Path

from app.results_scraper.telemetry import FAILED, SCRAPED, SKIPPED, RunTelemetry


def test_finalize_writes_entries_and_counts(_configure_temp_paths: Path) -> None:
    telemetry = RunTelemetry(start_id=3, end_id=1)
    telemetry.add(3, SCRAPED, "ok", records=12)
    telemetry.add(2, SKIPPED, "no_results")
    telemetry.add(1, FAILED, "navigation_error", error="boom")

    path = telemetry.finalize(extra={"output": "results.csv"})

    assert path.parent == _configure_temp_paths / "runs"
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["count_scraped"] == 1
    assert payload["count_skipped"] == 1
    assert payload["count_failed"] == 1
    assert payload["output"] == "results.csv"
    assert payload["entries"][0] == {
        "identifier": 3,
        "status": "scraped",
        "reason": "ok",
        "records": 12,
    }


def test_summary_defaults_to_zero_counts() -> None:
    summary = RunTelemetry(start_id=1, end_id=5).summary_dict()
    assert (summary["count_scraped"], summary["count_skipped"], summary["count_failed"]) == (0, 0, 0)
