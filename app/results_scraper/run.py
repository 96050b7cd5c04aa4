"""Range scraper for Sport80 competition results.

Workflow:

- Walk result identifiers from ``start_id`` down to ``end_id``.
- Load ``<base_url>/<id>`` through a data source (Playwright by default).
- Skip identifiers whose results table never renders or is empty.
- Read every page of the results table via the "Next page" control.
- After each identifier with results, rewrite the checkpoint CSV with all
  events collected so far.
- Pause between identifiers to stay polite to the upstream site.

Failures are isolated per identifier: the run logs them and moves on. Only a
checkpoint write failure (or a bug in the loop itself) aborts the run.
"""

from __future__ import annotations

import argparse
import time
from typing import Any, Callable, ContextManager, Dict, List, Optional, Tuple

from .checkpoint import CheckpointWriter
from .config import ScrapeConfig, today_iso
from .config_validation import validate_scrape_config
from .error_codes import ErrorCode, classify_exception
from .logging_utils import _scraper_event
from .models import Event, RunContext
from .pagination import walk_all_pages
from .playwright_source import PlaywrightDataSource
from .retry_policy import compute_backoff_seconds, decide_retry
from .schemas import SCHEMAS, get_schema
from .selenium_source import SeleniumDataSource
from .sources import DataSource
from .telemetry import FAILED, SCRAPED, SKIPPED, RunTelemetry
from .utils import ensure_dirs, log_line, setup_run_logger

SourceFactory = Callable[[ScrapeConfig], ContextManager[DataSource]]

SOURCE_FACTORIES: Dict[str, SourceFactory] = {
    "playwright": PlaywrightDataSource,
    "selenium": SeleniumDataSource,
}


def _short_error_message(exc: BaseException, max_length: int = 200) -> str:
    message = str(exc) or exc.__class__.__name__
    message = " ".join(message.split())
    if len(message) > max_length:
        return message[: max_length - 3] + "..."
    return message


def scrape_identifier(
    source: DataSource,
    identifier: int,
    cfg: ScrapeConfig,
) -> Tuple[Optional[Event], str]:
    """Scrape one identifier.

    Returns ``(event, reason)``. ``event`` is ``None`` when the identifier is
    skipped: ``reason`` is then ``content_timeout`` (no table rendered) or
    ``no_results`` (table had no rows). Navigation and pagination failures
    propagate.
    """

    document = source.resolve_document(identifier)

    if not document.await_ready(cfg.content_timeout_seconds):
        return None, ErrorCode.CONTENT_TIMEOUT

    records = walk_all_pages(
        document,
        max_pages=cfg.max_pages,
        page_timeout=cfg.page_timeout_seconds,
        identifier=identifier,
    )
    if not records:
        return None, ErrorCode.NO_RESULTS

    name = document.read_event_name() or f"Event {identifier}"
    event_date = document.read_event_date() or today_iso()
    return Event(identifier=identifier, name=name, date=event_date, records=tuple(records)), "ok"


def _scrape_with_retries(
    source: DataSource,
    identifier: int,
    cfg: ScrapeConfig,
    *,
    sleep: Callable[[float], None],
) -> Tuple[Optional[Event], str]:
    attempt = 0
    while True:
        attempt += 1
        try:
            return scrape_identifier(source, identifier, cfg)
        except Exception as exc:  # noqa: BLE001
            code = classify_exception(exc)
            if not decide_retry(attempt, cfg.max_attempts, error_code=code, identifier=identifier):
                raise
            backoff = compute_backoff_seconds(attempt)
            log_line(
                f"[RUN] Retrying event {identifier} in {backoff:g}s after {code}: "
                f"{_short_error_message(exc)}"
            )
            sleep(backoff)


def run_range(
    cfg: ScrapeConfig,
    source: DataSource,
    *,
    writer: Optional[CheckpointWriter] = None,
    context: Optional[RunContext] = None,
    telemetry: Optional[RunTelemetry] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RunContext:
    """Scrape every identifier in ``cfg`` and checkpoint after each success.

    Per-identifier errors are logged and recorded in ``telemetry``; the loop
    then moves on. :class:`~app.results_scraper.checkpoint.CheckpointWriteError`
    is not caught. When nothing was checkpointed during the walk (empty range,
    or every identifier skipped) a header-only checkpoint is written at the end.
    """

    writer = writer or CheckpointWriter(cfg.output_path, get_schema(cfg.schema))
    context = context or RunContext(id_base=cfg.id_base)
    telemetry = telemetry or RunTelemetry(cfg.start_id, cfg.end_id)

    _scraper_event(
        "plan",
        start_id=cfg.start_id,
        end_id=cfg.end_id,
        identifiers=len(cfg.identifiers()),
        output=str(writer.path),
        schema=writer.schema.name,
    )

    for identifier in cfg.identifiers():
        log_line(f"Scraping event ID: {identifier}")
        try:
            event, reason = _scrape_with_retries(source, identifier, cfg, sleep=sleep)
        except Exception as exc:  # noqa: BLE001
            code = classify_exception(exc)
            message = _short_error_message(exc)
            log_line(f"[RUN][ERROR] Failed to scrape event {identifier}: {message}")
            _scraper_event(
                "error",
                phase="identifier",
                identifier=identifier,
                error_code=code,
                error=message,
            )
            telemetry.add(identifier, FAILED, code, error=message)
        else:
            if event is None:
                log_line(f"No results found for event {identifier} ({reason}), skipping...")
                telemetry.add(identifier, SKIPPED, reason)
            else:
                context.add_event(event)
                writer.write(context)
                context.checkpoints_written += 1
                log_line(
                    f"Successfully scraped {len(event.records)} results for {event.name}"
                )
                telemetry.add(
                    identifier,
                    SCRAPED,
                    "ok",
                    records=len(event.records),
                    name=event.name,
                )

        if cfg.delay_seconds > 0:
            sleep(cfg.delay_seconds)

    if context.checkpoints_written == 0:
        writer.write(context)
        context.checkpoints_written += 1

    return context


def run_scrape(
    cfg: ScrapeConfig,
    *,
    source_factory: Optional[SourceFactory] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Dict[str, Any]:
    """Open a data source, scrape the configured range and return a summary."""

    ensure_dirs()
    log_path = setup_run_logger()

    factory = source_factory or SOURCE_FACTORIES[cfg.browser]
    telemetry = RunTelemetry(cfg.start_id, cfg.end_id)

    with factory(cfg) as source:
        context = run_range(cfg, source, telemetry=telemetry, sleep=sleep)

    summary: Dict[str, Any] = {
        **telemetry.summary_dict(),
        "events": len(context.events),
        "records": context.record_count,
        "output": str(cfg.output_path),
        "log_path": str(log_path),
    }
    try:
        summary["telemetry_path"] = str(telemetry.finalize(extra=summary))
    except OSError as exc:
        log_line(f"[RUN][WARN] Unable to write run telemetry: {exc}")
    _scraper_event("summary", **summary)
    return summary


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scrape a descending range of Sport80 results pages into a CSV checkpoint.",
    )
    parser.add_argument("--start", dest="start_id", type=int, default=None)
    parser.add_argument("--end", dest="end_id", type=int, default=None)
    parser.add_argument("--output", dest="output_path", default=None)
    parser.add_argument(
        "--id-base",
        dest="id_base",
        type=int,
        default=None,
        help="Synthetic id of the first checkpoint row.",
    )
    parser.add_argument("--schema", choices=sorted(SCHEMAS), default=None)
    parser.add_argument("--browser", choices=sorted(SOURCE_FACTORIES), default=None)
    parser.add_argument("--headed", action="store_true", help="Show the browser window.")
    parser.add_argument("--base-url", dest="base_url", default=None)
    parser.add_argument("--delay", dest="delay_seconds", type=float, default=None)
    parser.add_argument("--max-pages", dest="max_pages", type=int, default=None)
    parser.add_argument("--max-attempts", dest="max_attempts", type=int, default=None)
    parser.add_argument("--nav-timeout", dest="nav_timeout_seconds", type=float, default=None)
    parser.add_argument(
        "--content-timeout", dest="content_timeout_seconds", type=float, default=None
    )
    parser.add_argument("--page-timeout", dest="page_timeout_seconds", type=float, default=None)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point; returns the process exit code."""

    parser = _build_parser()
    args = parser.parse_args(argv)

    overrides = {
        key: value
        for key, value in vars(args).items()
        if key != "headed"
    }
    if args.headed:
        overrides["headless"] = False

    try:
        cfg = validate_scrape_config(ScrapeConfig.from_env(**overrides), "cli")
    except ValueError as exc:
        parser.error(str(exc))

    log_line("Starting scraper...")
    try:
        summary = run_scrape(cfg)
    except Exception as exc:  # noqa: BLE001
        log_line(f"Scraping failed with error: {_short_error_message(exc)}")
        _scraper_event(
            "error",
            phase="run",
            error_code=classify_exception(exc),
            error=_short_error_message(exc),
        )
        return 1

    log_line(
        "Scraping completed successfully: "
        f"{summary['records']} results from {summary['events']} events "
        f"(scraped={summary['count_scraped']}, skipped={summary['count_skipped']}, "
        f"failed={summary['count_failed']})"
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

__all__ = ["main", "run_range", "run_scrape", "scrape_identifier"]
