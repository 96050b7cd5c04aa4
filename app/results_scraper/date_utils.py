from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

_DATE_FORMATS: Iterable[str] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%d-%b-%Y",
)


def normalize_date(value: str) -> str:
    """Return ``value`` as ``YYYY-MM-DD`` when it parses as a date.

    Accepts ISO dates and datetimes plus the US and long-form month layouts
    the rankings site renders. Datetimes carrying an offset are converted to
    UTC before the day is taken. Anything else is returned unchanged so the
    checkpoint never loses the raw text.
    """

    candidate = (value or "").strip()
    if not candidate:
        return value or ""

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(candidate, fmt).strftime("%Y-%m-%d")
        except ValueError:
            continue

    try:
        parsed = datetime.fromisoformat(candidate.replace("Z", "+00:00"))
    except ValueError:
        return value
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.strftime("%Y-%m-%d")


__all__ = ["normalize_date"]
