from __future__ import annotations

from typing import Any

from .utils import log_line


def _scraper_event(label: str = "", *, phase: str | None = None, **fields: Any) -> None:
    """Emit a structured scraper log line.

    Lines look like ``[SCRAPER][PAGE] identifier=6836, page=2, rows=25``. The
    event identifier, when given, leads the payload so one event's lines can
    be grepped together; the other fields follow sorted by name, and fields
    left as ``None`` are omitted. ``phase`` may stand in for the label; when
    both are given the phase is emitted as part of the payload instead.
    """

    try:
        phase_label = label or (phase or "")
        if phase and label:
            fields.setdefault("phase", phase)
        identifier = fields.pop("identifier", None)
        parts = [f"{k}={v!r}" for k, v in sorted(fields.items()) if v is not None]
        if identifier is not None:
            parts.insert(0, f"identifier={identifier}")
        log_line(f"[SCRAPER][{phase_label.upper()}] {', '.join(parts)}")
    except Exception:
        # Never let logging break the scraper.
        return


__all__ = ["_scraper_event"]
