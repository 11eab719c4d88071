"""Timestamp and file-naming helpers for the query event logs."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from pathlib import Path

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


def parse_timestamp(raw: str | None) -> datetime:
    """Parse an ISO-8601 string (``Z`` suffix allowed), falling back to now."""

    candidate = (raw or "").strip()
    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError:
        return datetime.now(UTC)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def day_slug(raw: str | None = None) -> str:
    """Return the UTC day of *raw* as ``YYYYMMDD``."""

    return parse_timestamp(raw).strftime("%Y%m%d")


def sanitize_session_id(session_id: str) -> str:
    """Make *session_id* safe to embed in a filename."""

    return _UNSAFE_CHARS.sub("-", session_id.strip()).strip("-") or "session"


def resolve_log_path(base_dir: Path, session_id: str, timestamp: str | None = None) -> Path:
    """Return the daily log file for *session_id*, creating *base_dir* if needed.

    Each session writes to ``<base_dir>/<YYYYMMDD>-<session>.jsonl`` so a
    long-running API process rolls over to a new file every UTC day.
    """

    base = base_dir.expanduser()
    base.mkdir(parents=True, exist_ok=True)
    return base / f"{day_slug(timestamp)}-{sanitize_session_id(session_id)}.jsonl"


def utc_now_iso() -> str:
    """Return the current UTC time in ISO-8601 with millisecond precision."""

    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
