"""FastAPI-powered HTTP API for the SQL learning sandbox."""

from __future__ import annotations

import argparse
import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError

from sqlsandbox.core.config import Settings, load_settings
from sqlsandbox.core.database import ensure_database_directory
from sqlsandbox.core.errors import (
    DatabaseConnectionError,
    ExecutionError,
    InvalidInputError,
    SandboxError,
    ShapingError,
)
from sqlsandbox.core.logging_utils import utc_now_iso
from sqlsandbox.core.service import QueryService, build_query_service, truncate_sql
from sqlsandbox.integrations.sample_queries import SAMPLE_QUERIES
from sqlsandbox.integrations.sample_schema import bootstrap_database
from sqlsandbox.integrations.sandbox_repository import SandboxRepository

LOGGER = logging.getLogger(__name__)

API_SESSION_ID = "api"


class ApiResponse(BaseModel):
    success: bool
    data: Any = None
    message: str
    timestamp: str = Field(default_factory=utc_now_iso)

    @classmethod
    def ok(cls, data: Any) -> ApiResponse:
        return cls(success=True, data=data, message="Success")

    @classmethod
    def error(cls, message: str) -> ApiResponse:
        return cls(success=False, data=None, message=message)


class QueryRequest(BaseModel):
    sql: str | None = Field(None, description="SQL statement to execute")


class StudentCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    age: int
    grade: int
    email: str | None = None


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(ApiResponse.error(message).model_dump(), status_code=status_code)


def _status_for(exc: SandboxError) -> tuple[int, str]:
    if isinstance(exc, InvalidInputError):
        return status.HTTP_400_BAD_REQUEST, str(exc)
    if isinstance(exc, ExecutionError):
        return status.HTTP_400_BAD_REQUEST, f"Query error: {exc.database_message}"
    if isinstance(exc, DatabaseConnectionError):
        return status.HTTP_503_SERVICE_UNAVAILABLE, str(exc)
    if isinstance(exc, ShapingError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR, f"Could not shape result: {exc}"
    return status.HTTP_500_INTERNAL_SERVER_ERROR, f"Internal server error: {exc}"


def _seed_database(service: QueryService) -> None:
    try:
        bootstrap_database(service.engine)
    except SQLAlchemyError:
        LOGGER.exception("Seeding the sample tables failed; continuing without fixtures")


def create_app(
    config_path: str = "configs/dev.yaml",
    *,
    settings: Settings | None = None,
    service: QueryService | None = None,
) -> FastAPI:
    """Build the API application from a config file or explicit settings."""

    if settings is None:
        LOGGER.info("Initialising web application with config '%s'", config_path)
        settings = load_settings(config_path)
    if service is None:
        ensure_database_directory(settings.database)
        service = build_query_service(settings)
    if settings.database.seed_on_startup:
        _seed_database(service)
    repository = SandboxRepository(service=service)

    app = FastAPI(title="SQL Learning Sandbox API", version="0.1.0")
    app.state.settings = settings
    app.state.query_service = service
    app.state.repository = repository
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(SandboxError)
    async def handle_sandbox_error(request: Request, exc: SandboxError) -> JSONResponse:
        status_code, message = _status_for(exc)
        LOGGER.info("%s %s failed with %s: %s", request.method, request.url.path, status_code, exc)
        return _error_response(status_code, message)

    def health_payload() -> dict[str, Any]:
        report = repository.health()
        return {
            "status": "healthy",
            "database": "connected" if report["connected"] else "disconnected",
            "message": report["message"],
            "sampleQueries": report["sample_queries"],
            "tableNames": report["table_names"],
            "timestamp": utc_now_iso(),
        }

    @app.get("/")
    def index() -> dict[str, Any]:
        return ApiResponse.ok(health_payload()).model_dump()

    @app.get("/api/health")
    def healthcheck() -> dict[str, Any]:
        return ApiResponse.ok(health_payload()).model_dump()

    @app.post("/api/query")
    def run_query(payload: QueryRequest) -> dict[str, Any]:
        LOGGER.info("Custom query requested: %s", truncate_sql(payload.sql or ""))
        result = service.execute(payload.sql, session_id=API_SESSION_ID)
        return ApiResponse.ok(result.to_payload()).model_dump()

    @app.get("/api/students")
    def list_students() -> dict[str, Any]:
        return ApiResponse.ok(repository.list_students()).model_dump()

    @app.post("/api/students", status_code=status.HTTP_201_CREATED, response_model=None)
    def add_student(payload: StudentCreateRequest) -> dict[str, Any] | JSONResponse:
        added = repository.add_student(
            name=payload.name,
            age=payload.age,
            grade=payload.grade,
            email=payload.email,
        )
        if not added:
            return _error_response(status.HTTP_400_BAD_REQUEST, "Failed to add student")
        return ApiResponse.ok("Student added successfully").model_dump()

    @app.get("/api/books")
    def list_books() -> dict[str, Any]:
        return ApiResponse.ok(repository.list_books()).model_dump()

    @app.get("/api/orders")
    def list_orders() -> dict[str, Any]:
        return ApiResponse.ok(repository.list_orders()).model_dump()

    @app.get("/api/stats")
    def database_stats() -> dict[str, Any]:
        return ApiResponse.ok(repository.stats()).model_dump()

    @app.get("/api/sample-queries")
    def sample_queries() -> dict[str, Any]:
        return ApiResponse.ok([query.to_dict() for query in SAMPLE_QUERIES]).model_dump()

    return app


def _configure_logging(debug: bool) -> None:
    root_logger = logging.getLogger()
    if root_logger.handlers:
        if debug:
            root_logger.setLevel(logging.DEBUG)
        return
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Launch the SQL sandbox HTTP API")
    parser.add_argument("--config", default="configs/dev.yaml", help="Path to configuration file")
    parser.add_argument("--host", help="Interface to bind the server (defaults to api.host)")
    parser.add_argument("--port", type=int, help="Port to bind the server (defaults to api.port)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    _configure_logging(debug=args.debug)
    settings = load_settings(args.config)
    app = create_app(config_path=args.config, settings=settings)

    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover
        raise SystemExit("uvicorn must be installed to run the HTTP API") from exc

    host = args.host or settings.api.host
    port = args.port or settings.api.port
    LOGGER.info("Starting uvicorn on %s:%s", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
