"""Utilities for loading sandbox settings from YAML configuration files."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_DATABASE_URL = "sqlite:///var/sqllearning.db"
COLUMN_CASES = ("upper", "lower", "preserve")


@dataclass(slots=True)
class DatabaseSettings:
    url: str = DEFAULT_DATABASE_URL
    url_env: str | None = None
    column_case: str = "upper"
    seed_on_startup: bool = True
    echo: bool = False

    def resolve_url(self) -> str:
        if self.url_env:
            value = os.getenv(self.url_env)
            if value:
                return value
        if not self.url:
            raise OSError(
                f"Database URL missing; set 'database.url' or the '{self.url_env}' environment variable"
            )
        return self.url


@dataclass(slots=True)
class ApiSettings:
    host: str = "127.0.0.1"
    port: int = 8080
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass(slots=True)
class PathsSettings:
    query_logs_dir: str | None = None


@dataclass(slots=True)
class Settings:
    database: DatabaseSettings
    api: ApiSettings
    paths: PathsSettings | None


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def load_settings(path: str | Path) -> Settings:
    """Read configuration from *path* and return structured settings."""

    config_path = Path(path)
    raw = _load_yaml(config_path)

    database_raw = raw.get("database") or {}
    column_case = str(database_raw.get("column_case", "upper")).lower()
    if column_case not in COLUMN_CASES:
        raise ValueError(
            f"Unsupported column_case '{column_case}'; expected one of {', '.join(COLUMN_CASES)}"
        )
    url_env = database_raw.get("url_env")
    database = DatabaseSettings(
        url=str(database_raw.get("url", DEFAULT_DATABASE_URL) or ""),
        url_env=str(url_env) if url_env else None,
        column_case=column_case,
        seed_on_startup=bool(database_raw.get("seed_on_startup", True)),
        echo=bool(database_raw.get("echo", False)),
    )

    api_raw = raw.get("api") or {}
    origins = api_raw.get("cors_origins", ["*"])
    if isinstance(origins, str):
        origins = [origins]
    api = ApiSettings(
        host=str(api_raw.get("host", "127.0.0.1")),
        port=int(api_raw.get("port", 8080)),
        cors_origins=[str(origin) for origin in origins],
    )

    paths_raw: dict[str, Any] | None = raw.get("paths")
    paths = None
    if paths_raw:
        query_logs_dir = paths_raw.get("query_logs_dir")
        paths = PathsSettings(
            query_logs_dir=str(query_logs_dir) if query_logs_dir else None,
        )

    return Settings(database=database, api=api, paths=paths)
