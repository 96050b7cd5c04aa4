"""Per-run telemetry for range scrapes."""

from __future__ import annotations

import time
import uuid
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import config
from .utils import save_json_file

SCRAPED = "scraped"
SKIPPED = "skipped"
FAILED = "failed"


def _ts() -> str:
    return time.strftime("%Y%m%d_%H%M%S")


class RunTelemetry:
    """Collect one outcome entry per identifier."""

    def __init__(self, start_id: int, end_id: int, runs_dir: Optional[Path] = None) -> None:
        self.run_id = f"{_ts()}_{uuid.uuid4().hex[:8]}"
        self.start_id = start_id
        self.end_id = end_id
        self.runs_dir = Path(runs_dir) if runs_dir is not None else config.RUNS_DIR
        self.started_at = time.time()
        self.entries: List[Dict[str, Any]] = []
        self.summary: Dict[str, int] = defaultdict(int)

    def add(self, identifier: int, status: str, reason: str, **meta: Any) -> None:
        self.entries.append(
            {
                "identifier": identifier,
                "status": status,
                "reason": reason,
                **meta,
            }
        )
        self.summary[f"count_{status}"] += 1

    def summary_dict(self) -> Dict[str, Any]:
        return {
            "run_id": self.run_id,
            "start_id": self.start_id,
            "end_id": self.end_id,
            **{key: self.summary.get(key, 0) for key in (
                f"count_{SCRAPED}", f"count_{SKIPPED}", f"count_{FAILED}"
            )},
        }

    def finalize(self, extra: Optional[Dict[str, Any]] = None) -> Path:
        payload = {
            **self.summary_dict(),
            "started_at": self.started_at,
            "ended_at": time.time(),
            "entries": self.entries,
            **(extra or {}),
        }
        path = self.runs_dir / f"run_{self.run_id}.json"
        save_json_file(path, payload)
        return path


__all__ = ["FAILED", "RunTelemetry", "SCRAPED", "SKIPPED"]
