"""Fixed read/write operations over the sample tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError

from sqlsandbox.core.database import acquire_connection
from sqlsandbox.core.errors import ExecutionError, InvalidInputError, SandboxError
from sqlsandbox.core.service import QueryService
from sqlsandbox.integrations.sample_queries import SAMPLE_QUERIES, TABLE_NAMES

LOGGER = logging.getLogger(__name__)

_ORDERS_WITH_DETAILS = """
    SELECT o.id, o.student_id, o.book_id, o.order_date, o.quantity,
           s.name AS student_name, b.title AS book_title, b.price AS book_price
    FROM orders o
    JOIN students s ON o.student_id = s.id
    JOIN books b ON o.book_id = b.id
    ORDER BY o.order_date DESC, o.id
"""

_INSERT_STUDENT = text(
    "INSERT INTO students (name, age, grade, email) VALUES (:name, :age, :grade, :email)"
)


@dataclass(slots=True)
class SandboxRepository:
    """Canned queries behind the HTTP listing and statistics endpoints."""

    service: QueryService

    def list_students(self) -> list[dict[str, Any]]:
        return self.service.execute("SELECT * FROM students ORDER BY name").records()

    def list_books(self) -> list[dict[str, Any]]:
        return self.service.execute("SELECT * FROM books ORDER BY title").records()

    def list_orders(self) -> list[dict[str, Any]]:
        return self.service.execute(_ORDERS_WITH_DETAILS).records()

    def add_student(self, *, name: str, age: int, grade: int, email: str | None = None) -> bool:
        """Insert a student with bound parameters; ``True`` when a row was written."""

        if not name or not name.strip():
            raise InvalidInputError("Student name is required")
        if age <= 0 or grade <= 0:
            raise InvalidInputError("Student age and grade must be positive")

        params = {"name": name.strip(), "age": age, "grade": grade, "email": email}
        with acquire_connection(self.service.engine) as connection:
            try:
                inserted = connection.execute(_INSERT_STUDENT, params).rowcount
                connection.commit()
            except DBAPIError as exc:
                message = str(exc.orig) if exc.orig is not None else str(exc)
                raise ExecutionError(message) from exc
        LOGGER.info("Added student name=%s grade=%s", params["name"], grade)
        return inserted > 0

    def stats(self) -> dict[str, Any]:
        """Return table totals, rounded averages and books per genre."""

        genres = self.service.execute(
            "SELECT genre, COUNT(*) AS count FROM books GROUP BY genre ORDER BY count DESC, genre"
        )
        return {
            "totalStudents": self._scalar("SELECT COUNT(*) FROM students"),
            "totalBooks": self._scalar("SELECT COUNT(*) FROM books"),
            "totalOrders": self._scalar("SELECT COUNT(*) FROM orders"),
            "averageStudentAge": _round2(self._scalar("SELECT AVG(age) FROM students")),
            "averageBookPrice": _round2(self._scalar("SELECT AVG(price) FROM books")),
            "booksByGenre": {str(row[0]): row[1] for row in genres.rows},
        }

    def health(self) -> dict[str, Any]:
        """Report connectivity without raising."""

        try:
            self.service.check_connection()
        except SandboxError as exc:
            LOGGER.warning("Health check could not reach the database: %s", exc)
            return {
                "connected": False,
                "message": str(exc),
                "sample_queries": [],
                "table_names": [],
            }
        return {
            "connected": True,
            "message": "Green means go!",
            "sample_queries": [query.to_dict() for query in SAMPLE_QUERIES],
            "table_names": list(TABLE_NAMES),
        }

    def _scalar(self, sql: str) -> Any:
        result = self.service.execute(sql)
        return result.rows[0][0] if result.rows else None


def _round2(value: Any) -> float:
    if value is None:
        return 0.0
    return round(float(value) * 100.0) / 100.0
