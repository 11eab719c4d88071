"""Catalog of canned queries offered to learners."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class NamedQuery:
    title: str
    query: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


TABLE_NAMES: tuple[str, ...] = ("books", "favorites", "orders", "students")

SAMPLE_QUERIES: tuple[NamedQuery, ...] = (
    NamedQuery("Find All Students", "SELECT * FROM students;"),
    NamedQuery("Find Students by Grade", "SELECT name, age FROM students WHERE grade = 7;"),
    NamedQuery(
        "Find Unique Students by Grade",
        "SELECT DISTINCT name, age FROM students WHERE grade = 7;",
    ),
    NamedQuery("Count Students", "SELECT COUNT(*) as total_students FROM students;"),
    NamedQuery(
        "Group Students by Grade",
        "SELECT grade, COUNT(*) as grade_students FROM students GROUP BY grade ORDER BY grade;",
    ),
    NamedQuery("Order Students by Age", "SELECT * FROM students ORDER BY age DESC;"),
    NamedQuery(
        "Join Favorites",
        "SELECT s.name, s.age, s.grade, f.fav_key, f.fav_val "
        "FROM students s JOIN favorites f ON s.id = f.student_id WHERE s.id = 1;",
    ),
    NamedQuery(
        "Insert 1",
        "INSERT INTO students (name, age, grade) VALUES ('Ivy Chen', 14, 9);",
    ),
    NamedQuery(
        "Insert 2",
        "INSERT INTO students (name, age, grade) VALUES ('Jack Hill', 12, 7), ('Kara Diaz', 16, 11);",
    ),
)

CONSOLE_EXAMPLES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Basic SELECT", ("SELECT * FROM students;", "SELECT name, age FROM students;")),
    (
        "WHERE clause",
        ("SELECT * FROM students WHERE age > 14;", "SELECT * FROM books WHERE price < 20;"),
    ),
    (
        "ORDER BY",
        ("SELECT * FROM students ORDER BY age;", "SELECT * FROM books ORDER BY price DESC;"),
    ),
    (
        "COUNT and GROUP BY",
        (
            "SELECT grade, COUNT(*) FROM students GROUP BY grade;",
            "SELECT genre, AVG(price) FROM books GROUP BY genre;",
        ),
    ),
    (
        "JOINs",
        (
            "SELECT s.name, b.title FROM students s",
            "JOIN orders o ON s.id = o.student_id",
            "JOIN books b ON o.book_id = b.id;",
        ),
    ),
    (
        "INSERT new data",
        (
            "INSERT INTO students (name, age, grade, email)",
            "VALUES ('Your Name', 15, 10, 'you@school.edu');",
        ),
    ),
    ("UPDATE data", ("UPDATE books SET price = 19.99 WHERE id = 1;",)),
)
