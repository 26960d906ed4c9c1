"""Per-run JSONL event log."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from trendsignal.domain.events import RunEvent

EVENTS_FILENAME = "events.jsonl"


class RunEventLog:
    """Append run events to ``<events_dir>/<run_id>/events.jsonl``.

    Every record carries the run id the log was opened with, so callers only
    name the event and its payload.
    """

    def __init__(self, events_dir: str, run_id: str) -> None:
        self.run_id = run_id
        self.path = Path(events_dir) / run_id / EVENTS_FILENAME
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, event_type: str, payload: dict[str, Any] | None = None) -> RunEvent:
        event = RunEvent(run_id=self.run_id, event_type=event_type, payload=dict(payload or {}))
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(event.to_record(), default=str))
            handle.write("\n")
        return event
