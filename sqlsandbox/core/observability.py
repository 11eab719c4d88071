"""Per-session JSONL trail of the statements learners run.

The query service reports three lifecycle events for every statement:
``query_received`` (the truncated SQL text), ``query_executed`` (statement
kind, row count, elapsed milliseconds) and ``query_failed`` (error class and
database message). Each session (``api``, ``console`` or a caller-chosen
id) gets one file per UTC day so a classroom's activity can be replayed.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from sqlsandbox.core.logging_utils import resolve_log_path, utc_now_iso


class QueryObservationSink(Protocol):
    def log_event(self, session_id: str, event: str, payload: dict[str, Any]) -> None:  # pragma: no cover - interface
        ...


def _build_record(session_id: str, event: str, payload: dict[str, Any]) -> dict[str, Any]:
    # Header keys lead each line; empty payload fields are dropped.
    record: dict[str, Any] = {
        "timestamp": utc_now_iso(),
        "session_id": session_id,
        "event": event,
    }
    record.update((key, value) for key, value in payload.items() if value is not None and key not in record)
    return record


@dataclass(slots=True)
class JSONLQueryLogger(QueryObservationSink):
    """Appends query lifecycle events to ``<base_dir>/<day>-<session>.jsonl``."""

    base_dir: Path

    def log_event(self, session_id: str, event: str, payload: dict[str, Any]) -> None:  # type: ignore[override]
        record = _build_record(session_id, event, payload)
        target = resolve_log_path(self.base_dir, session_id, record["timestamp"])
        with target.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
