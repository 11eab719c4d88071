"""Tests for the FastAPI HTTP layer."""

# ruff: noqa: PLR2004

from __future__ import annotations

import re
from pathlib import Path

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from sqlsandbox.core.config import ApiSettings, DatabaseSettings, Settings
from sqlsandbox.core.database import create_database_engine
from sqlsandbox.core.service import QueryService
from sqlsandbox.core.webapp import create_app


def _write_config(tmp_path: Path) -> Path:
    config = tmp_path / "config.yaml"
    config.write_text(
        f"""
database:
  url: sqlite:///{tmp_path / 'data' / 'sandbox.db'}
  column_case: upper
  seed_on_startup: true
api:
  cors_origins: ["*"]
paths:
  query_logs_dir: {tmp_path / 'logs'}
""",
        encoding="utf-8",
    )
    return config


@pytest.fixture()
def client(tmp_path: Path) -> TestClient:
    app = create_app(config_path=str(_write_config(tmp_path)))
    with TestClient(app) as test_client:
        yield test_client


def test_query_endpoint_returns_shaped_result(client: TestClient) -> None:
    response = client.post("/api/query", json={"sql": "SELECT name, age FROM students WHERE grade = 7"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["message"] == "Success"
    assert payload["data"]["columns"] == ["NAME", "AGE"]
    assert payload["data"]["rows"] == [["Charlie Brown", 12]]
    assert payload["data"]["totalRows"] == 1
    assert payload["data"]["count"] == 1
    assert isinstance(payload["data"]["executionTimeMs"], int)


def test_query_endpoint_reports_mutations(client: TestClient) -> None:
    response = client.post(
        "/api/query",
        json={"sql": "INSERT INTO students (name, age, grade) VALUES ('X', 10, 5)"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["columns"] == ["rows_affected"]
    assert data["rows"] == [[1]]
    assert data["totalRows"] == 1


@pytest.mark.parametrize("body", [{"sql": ""}, {"sql": "   "}, {}])
def test_query_endpoint_requires_sql(client: TestClient, body: dict[str, str]) -> None:
    response = client.post("/api/query", json=body)

    assert response.status_code == 400
    payload = response.json()
    assert payload["success"] is False
    assert payload["data"] is None
    assert payload["message"] == "SQL query is required"


def test_query_endpoint_surfaces_database_message(client: TestClient) -> None:
    response = client.post("/api/query", json={"sql": "SELECT * FROM nonexistent_table"})

    assert response.status_code == 400
    payload = response.json()
    assert payload["success"] is False
    assert payload["message"].startswith("Query error:")
    assert "no such table" in payload["message"]


def test_unreadable_date_returns_error_envelope(client: TestClient) -> None:
    client.post("/api/query", json={"sql": "UPDATE students SET enrollment_date = X'FF' WHERE id = 1"})

    response = client.post("/api/query", json={"sql": "SELECT enrollment_date FROM students"})

    assert response.status_code == 500
    payload = response.json()
    assert payload["success"] is False
    assert payload["message"].startswith("Could not shape result:")


def test_students_listing_and_creation(client: TestClient) -> None:
    response = client.get("/api/students")
    assert response.status_code == 200
    students = response.json()["data"]
    assert len(students) == 8
    assert students[0]["name"] == "Alice Johnson"
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", students[0]["enrollment_date"])

    created = client.post(
        "/api/students",
        json={"name": "Ivy Chen", "age": 14, "grade": 9, "email": "ivy.c@school.edu"},
    )
    assert created.status_code == 201
    assert created.json()["data"] == "Student added successfully"
    assert len(client.get("/api/students").json()["data"]) == 9


def test_student_creation_rejects_invalid_age(client: TestClient) -> None:
    response = client.post("/api/students", json={"name": "Bad", "age": 0, "grade": 5})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_books_and_orders_listing(client: TestClient) -> None:
    books = client.get("/api/books").json()["data"]
    assert len(books) == 8
    assert books[0]["title"] == "Art and Creativity"
    assert books[0]["available"] is True
    assert books[0]["price"] == pytest.approx(22.0)

    orders = client.get("/api/orders").json()["data"]
    assert len(orders) == 14
    assert {"student_name", "book_title", "book_price", "order_date"} <= set(orders[0])


def test_stats_endpoint(client: TestClient) -> None:
    stats = client.get("/api/stats").json()["data"]

    assert stats["totalStudents"] == 8
    assert stats["totalBooks"] == 8
    assert stats["totalOrders"] == 14
    assert stats["averageStudentAge"] == pytest.approx(14.38)
    assert stats["averageBookPrice"] == pytest.approx(19.25)
    assert sum(stats["booksByGenre"].values()) == 8


def test_health_and_root_report_connected(client: TestClient) -> None:
    for path in ("/", "/api/health"):
        response = client.get(path)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert "students" in data["tableNames"]
        assert data["sampleQueries"]


def test_sample_queries_endpoint(client: TestClient) -> None:
    queries = client.get("/api/sample-queries").json()["data"]

    assert queries[0] == {"title": "Find All Students", "query": "SELECT * FROM students;"}


def test_cors_preflight_is_allowed(client: TestClient) -> None:
    response = client.options(
        "/api/query",
        headers={
            "Origin": "http://localhost:5500",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


def test_unreachable_database_is_reported(tmp_path: Path) -> None:
    database = DatabaseSettings(
        url=f"sqlite:///{tmp_path / 'missing' / 'db.sqlite'}", seed_on_startup=False
    )
    settings = Settings(database=database, api=ApiSettings(), paths=None)
    service = QueryService(engine=create_database_engine(database))

    app = create_app(settings=settings, service=service)
    with TestClient(app) as client:
        health = client.get("/api/health").json()["data"]
        assert health["database"] == "disconnected"

        response = client.post("/api/query", json={"sql": "SELECT 1"})
        assert response.status_code == 503
        assert response.json()["success"] is False
