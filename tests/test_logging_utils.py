from pathlib import Path

from app.results_scraper import logging_utils, utils


def test_scraper_event_label_and_phase(monkeypatch):
    events: list[str] = []
    monkeypatch.setattr(logging_utils, "log_line", lambda msg: events.append(msg))

    logging_utils._scraper_event("page", phase="page_cap_reached", identifier=6836)

    assert events
    line = events[-1]
    assert line.startswith("[SCRAPER][PAGE]")
    assert "phase='page_cap_reached'" in line
    assert "identifier=6836" in line


def test_scraper_event_swallows_logging_errors(monkeypatch):
    def broken(msg):  # noqa: ANN001
        raise RuntimeError("log sink gone")

    monkeypatch.setattr(logging_utils, "log_line", broken)

    logging_utils._scraper_event("state", kind="summary")


def test_scraper_event_leads_with_identifier_and_drops_unset_fields(monkeypatch):
    events: list[str] = []
    monkeypatch.setattr(logging_utils, "log_line", lambda msg: events.append(msg))

    logging_utils._scraper_event("page", rows=25, page=2, identifier=6836)
    logging_utils._scraper_event("page", rows=3, page=1, identifier=None)

    assert events == [
        "[SCRAPER][PAGE] identifier=6836, page=2, rows=25",
        "[SCRAPER][PAGE] page=1, rows=3",
    ]


def test_setup_run_logger_writes_timestamped_file(_configure_temp_paths: Path):
    log_path = utils.setup_run_logger()
    utils.log_line("hello from the test")

    for handler in utils.LOGGER.handlers:
        handler.flush()

    assert log_path.parent == _configure_temp_paths / "logs"
    assert log_path.name.startswith("scrape_")
    assert "hello from the test" in log_path.read_text(encoding="utf-8")
    assert utils.get_current_log_path() == log_path
