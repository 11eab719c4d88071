"""Two-way statement classification used to pick an execution path.

The check is a textual prefix heuristic, not a SQL grammar: only statements
whose trimmed text starts with ``SELECT`` are treated as reads. Other
read-only forms (``WITH ... SELECT``, ``PRAGMA``, ``SHOW``) and
multi-statement scripts are routed through the mutation path and report an
affected-row count instead of a result set.
"""

from __future__ import annotations

from enum import Enum


class StatementKind(str, Enum):
    READ = "read"
    MUTATION = "mutation"


_READ_PREFIX = "SELECT"


def is_read_statement(sql: str) -> bool:
    """Return ``True`` when *sql* should be executed as a result-set query."""

    return sql.strip().upper().startswith(_READ_PREFIX)


def classify_statement(sql: str) -> StatementKind:
    return StatementKind.READ if is_read_statement(sql) else StatementKind.MUTATION
