"""Execute arbitrary SQL and assemble a uniform :class:`QueryResult`."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from sqlalchemy.engine import Connection
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from sqlsandbox.core.errors import DatabaseConnectionError, ExecutionError, SandboxError
from sqlsandbox.core.models import QueryResult
from sqlsandbox.core.shaper import shape_result
from sqlsandbox.core.statements import StatementKind, classify_statement

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class QueryExecutor:
    """Runs one statement on a caller-supplied connection.

    Statements starting with ``SELECT`` are shaped into columns and rows.
    Everything else goes through the affected-rows path and is committed
    immediately, reporting a single synthetic ``rows_affected`` column.
    """

    column_case: str = "upper"

    def execute(self, sql: str, connection: Connection) -> QueryResult:
        kind = classify_statement(sql)
        try:
            if kind is StatementKind.READ:
                result = self._execute_read(sql, connection)
            else:
                result = self._execute_mutation(sql, connection)
        except DBAPIError as exc:
            raise _translate_error(exc, sql) from exc
        except SQLAlchemyError as exc:
            raise ExecutionError(str(exc), sql=sql) from exc

        LOGGER.debug(
            "Executed %s statement rows=%s elapsed_ms=%s",
            kind.value,
            result.total_rows,
            result.execution_time_ms,
        )
        return result

    def _execute_read(self, sql: str, connection: Connection) -> QueryResult:
        started = time.perf_counter()
        cursor_result = connection.exec_driver_sql(sql)
        try:
            columns, rows = shape_result(cursor_result)
        finally:
            cursor_result.close()
        elapsed_ms = _elapsed_ms(started)

        return QueryResult(
            columns=tuple(self._fold_column(name) for name in columns),
            rows=tuple(rows),
            total_rows=len(rows),
            execution_time_ms=elapsed_ms,
            statement_kind=StatementKind.READ,
        )

    def _execute_mutation(self, sql: str, connection: Connection) -> QueryResult:
        started = time.perf_counter()
        cursor_result = connection.exec_driver_sql(sql)
        try:
            # DDL and reads routed here report -1.
            affected = max(cursor_result.rowcount, 0)
        finally:
            cursor_result.close()
        connection.commit()
        elapsed_ms = _elapsed_ms(started)

        return QueryResult.for_mutation(affected, elapsed_ms)

    def _fold_column(self, name: str) -> str:
        if self.column_case == "upper":
            return name.upper()
        if self.column_case == "lower":
            return name.lower()
        return name


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _translate_error(exc: DBAPIError, sql: str) -> SandboxError:
    message = str(exc.orig) if exc.orig is not None else str(exc)
    if exc.connection_invalidated:
        return DatabaseConnectionError(f"Database connection lost: {message}")
    return ExecutionError(message, sql=sql)
