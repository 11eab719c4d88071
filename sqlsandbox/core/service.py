"""Boundary between callers (HTTP, console) and the query executor."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from sqlalchemy.engine import Engine

from sqlsandbox.core.config import Settings
from sqlsandbox.core.database import acquire_connection, create_database_engine
from sqlsandbox.core.errors import InvalidInputError, SandboxError
from sqlsandbox.core.executor import QueryExecutor
from sqlsandbox.core.models import QueryResult
from sqlsandbox.core.observability import JSONLQueryLogger, QueryObservationSink

LOGGER = logging.getLogger(__name__)

DEFAULT_SESSION_ID = "sandbox"


@dataclass(slots=True)
class QueryService:
    """Validates input and runs each statement on its own connection."""

    engine: Engine
    executor: QueryExecutor = field(default_factory=QueryExecutor)
    query_logger: QueryObservationSink | None = None

    def execute(self, sql: str | None, *, session_id: str = DEFAULT_SESSION_ID) -> QueryResult:
        """Execute *sql* and return its shaped result.

        Raises :class:`InvalidInputError` for empty input before any
        connection is acquired. Database failures surface as
        :class:`ExecutionError` or :class:`DatabaseConnectionError`.
        """

        if sql is None or not sql.strip():
            raise InvalidInputError("SQL query is required")

        statement = sql.strip()
        self._log(session_id, "query_received", {"sql": truncate_sql(statement)})
        try:
            with acquire_connection(self.engine) as connection:
                result = self.executor.execute(statement, connection)
        except SandboxError as exc:
            LOGGER.warning("Statement failed (%s): %s", type(exc).__name__, exc)
            self._log(
                session_id,
                "query_failed",
                {"error_type": type(exc).__name__, "message": str(exc)},
            )
            raise

        self._log(
            session_id,
            "query_executed",
            {
                "statement_kind": result.statement_kind.value,
                "total_rows": result.total_rows,
                "execution_time_ms": result.execution_time_ms,
            },
        )
        return result

    def check_connection(self) -> None:
        """Open and release a connection, raising if the database is unreachable."""

        with acquire_connection(self.engine):
            pass

    def _log(self, session_id: str, event: str, payload: dict[str, Any]) -> None:
        if self.query_logger is not None:
            self.query_logger.log_event(session_id, event, payload)


def build_query_service(settings: Settings) -> QueryService:
    """Create the engine, executor and optional JSONL logger from *settings*."""

    engine = create_database_engine(settings.database)
    executor = QueryExecutor(column_case=settings.database.column_case)
    query_logger = None
    if settings.paths is not None and settings.paths.query_logs_dir:
        logs_dir = Path(settings.paths.query_logs_dir).expanduser()
        logs_dir.mkdir(parents=True, exist_ok=True)
        query_logger = JSONLQueryLogger(base_dir=logs_dir)
    return QueryService(engine=engine, executor=executor, query_logger=query_logger)


def truncate_sql(value: str, limit: int = 200) -> str:
    text = " ".join(value.split())
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."
