"""Shared fixtures: a seeded, file-backed SQLite sandbox per test."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from sqlalchemy.engine import Engine

from sqlsandbox.core.config import DatabaseSettings
from sqlsandbox.core.database import create_database_engine
from sqlsandbox.core.executor import QueryExecutor
from sqlsandbox.core.service import QueryService
from sqlsandbox.integrations.sample_schema import bootstrap_database


@pytest.fixture()
def database_settings(tmp_path: Path) -> DatabaseSettings:
    return DatabaseSettings(url=f"sqlite:///{tmp_path / 'sandbox.db'}", seed_on_startup=False)


@pytest.fixture()
def engine(database_settings: DatabaseSettings) -> Iterator[Engine]:
    engine = create_database_engine(database_settings)
    bootstrap_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def service(engine: Engine) -> QueryService:
    return QueryService(engine=engine, executor=QueryExecutor(column_case="upper"))
