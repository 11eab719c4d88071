"""Result value objects returned by the query executor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from sqlsandbox.core.statements import StatementKind

CellValue = Union[None, bool, int, float, str]
"""Closed set of values a shaped cell may hold."""

ROWS_AFFECTED_COLUMN = "rows_affected"


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Uniform, immutable outcome of a single executed statement."""

    columns: tuple[str, ...]
    rows: tuple[tuple[CellValue, ...], ...]
    total_rows: int
    execution_time_ms: int
    statement_kind: StatementKind = StatementKind.READ

    @classmethod
    def for_mutation(cls, affected: int, execution_time_ms: int) -> QueryResult:
        return cls(
            columns=(ROWS_AFFECTED_COLUMN,),
            rows=((affected,),),
            total_rows=affected,
            execution_time_ms=execution_time_ms,
            statement_kind=StatementKind.MUTATION,
        )

    @property
    def count(self) -> int:
        return self.total_rows

    def records(self) -> list[dict[str, CellValue]]:
        """Return rows as dictionaries keyed by lower-cased column name.

        Later duplicates of the same column name overwrite earlier ones.
        """

        keys = [column.lower() for column in self.columns]
        return [dict(zip(keys, row)) for row in self.rows]

    def to_payload(self) -> dict[str, Any]:
        return {
            "columns": list(self.columns),
            "rows": [list(row) for row in self.rows],
            "totalRows": self.total_rows,
            "count": self.total_rows,
            "executionTimeMs": self.execution_time_ms,
            "statementKind": self.statement_kind.value,
        }
