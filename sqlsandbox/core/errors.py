"""Typed failures surfaced by the SQL execution engine."""

from __future__ import annotations


class SandboxError(Exception):
    """Base class for every error the sandbox reports to its callers."""


class InvalidInputError(SandboxError, ValueError):
    """Raised for caller mistakes such as an empty SQL string."""


class ExecutionError(SandboxError):
    """The database rejected the statement (syntax, constraint, type mismatch)."""

    def __init__(self, database_message: str, *, sql: str | None = None) -> None:
        super().__init__(database_message)
        self.database_message = database_message
        self.sql = sql


class DatabaseConnectionError(SandboxError, ConnectionError):
    """A connection could not be obtained or was lost mid-operation."""


class ShapingError(SandboxError):
    """A result cell could not be normalised into a serialisable value."""
