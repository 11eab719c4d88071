"""Engine construction and scoped connection acquisition."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Any, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.exc import DBAPIError
from sqlalchemy.pool import NullPool, StaticPool

from sqlsandbox.core.config import DatabaseSettings
from sqlsandbox.core.errors import DatabaseConnectionError, ShapingError

LOGGER = logging.getLogger(__name__)


def _convert_date(raw: bytes) -> date:
    try:
        return date.fromisoformat(raw.decode("utf-8").strip()[:10])
    except (UnicodeDecodeError, ValueError) as exc:
        raise ShapingError(f"Cannot read {raw!r} as a date") from exc


def _convert_boolean(raw: bytes) -> bool:
    return raw.strip().lower() in (b"1", b"true", b"t")


def register_sqlite_converters() -> None:
    """Install the DATE and BOOLEAN converters on the sqlite3 module.

    The registry is process-wide: every sqlite3 connection opened with
    ``PARSE_DECLTYPES`` in this interpreter uses these converters.
    """

    sqlite3.register_converter("DATE", _convert_date)
    sqlite3.register_converter("BOOLEAN", _convert_boolean)


def _is_memory_database(database: str | None) -> bool:
    return database in (None, "", ":memory:")


def create_database_engine(settings: DatabaseSettings) -> Engine:
    """Build an engine that hands out a fresh connection per call.

    File-backed SQLite and server databases use ``NullPool``. The in-memory
    SQLite URL keeps one shared connection so seeded data survives between
    calls.
    """

    url = make_url(settings.resolve_url())
    options: dict[str, Any] = {"echo": settings.echo, "poolclass": NullPool}
    if url.get_backend_name() == "sqlite":
        register_sqlite_converters()
        options["connect_args"] = {
            "detect_types": sqlite3.PARSE_DECLTYPES,
            "check_same_thread": False,
        }
        if _is_memory_database(url.database):
            options["poolclass"] = StaticPool
    LOGGER.debug("Creating engine for %s", url.render_as_string(hide_password=True))
    return create_engine(url, **options)


def ensure_database_directory(settings: DatabaseSettings) -> None:
    """Create the parent directory of a file-backed SQLite database."""

    url = make_url(settings.resolve_url())
    if url.get_backend_name() != "sqlite" or _is_memory_database(url.database):
        return
    Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)


@contextmanager
def acquire_connection(engine: Engine) -> Iterator[Connection]:
    """Yield a live connection and always release it on exit."""

    try:
        connection = engine.connect()
    except DBAPIError as exc:
        message = str(exc.orig) if exc.orig is not None else str(exc)
        LOGGER.warning("Database connection failed: %s", message)
        raise DatabaseConnectionError(f"Could not connect to database: {message}") from exc
    with connection:
        yield connection
