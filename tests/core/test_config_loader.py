"""Tests for loading sandbox settings from YAML."""

# ruff: noqa: PLR2004

from __future__ import annotations

from pathlib import Path

import pytest

from sqlsandbox.core.config import DEFAULT_DATABASE_URL, load_settings


def test_load_settings_parses_all_sections(tmp_path: Path) -> None:
    config_path = tmp_path / "dev.yaml"
    config_path.write_text(
        """
database:
  url: sqlite:///tmp/sandbox.db
  column_case: preserve
  seed_on_startup: false
  echo: true
api:
  host: 0.0.0.0
  port: 9090
  cors_origins: ["http://localhost:3000"]
paths:
  query_logs_dir: logs/queries
        """,
        encoding="utf-8",
    )

    settings = load_settings(config_path)

    assert settings.database.url == "sqlite:///tmp/sandbox.db"
    assert settings.database.column_case == "preserve"
    assert settings.database.seed_on_startup is False
    assert settings.database.echo is True
    assert settings.api.host == "0.0.0.0"
    assert settings.api.port == 9090
    assert settings.api.cors_origins == ["http://localhost:3000"]
    assert settings.paths is not None
    assert settings.paths.query_logs_dir == "logs/queries"


def test_load_settings_applies_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("", encoding="utf-8")

    settings = load_settings(config_path)

    assert settings.database.url == DEFAULT_DATABASE_URL
    assert settings.database.column_case == "upper"
    assert settings.database.seed_on_startup is True
    assert settings.api.port == 8080
    assert settings.api.cors_origins == ["*"]
    assert settings.paths is None


def test_database_url_env_overrides_file_value(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "dev.yaml"
    config_path.write_text(
        """
database:
  url: sqlite:///from-file.db
  url_env: SANDBOX_DB_URL
        """,
        encoding="utf-8",
    )
    monkeypatch.setenv("SANDBOX_DB_URL", "sqlite:///from-env.db")

    settings = load_settings(config_path)

    assert settings.database.resolve_url() == "sqlite:///from-env.db"
    monkeypatch.delenv("SANDBOX_DB_URL")
    assert settings.database.resolve_url() == "sqlite:///from-file.db"


def test_missing_url_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "dev.yaml"
    config_path.write_text(
        """
database:
  url: ""
  url_env: SANDBOX_DB_URL
        """,
        encoding="utf-8",
    )
    monkeypatch.delenv("SANDBOX_DB_URL", raising=False)

    settings = load_settings(config_path)

    with pytest.raises(OSError):
        settings.database.resolve_url()


def test_unknown_column_case_is_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "dev.yaml"
    config_path.write_text("database:\n  column_case: title\n", encoding="utf-8")

    with pytest.raises(ValueError, match="column_case"):
        load_settings(config_path)


def test_single_cors_origin_string_is_wrapped(tmp_path: Path) -> None:
    config_path = tmp_path / "dev.yaml"
    config_path.write_text("api:\n  cors_origins: http://example.com\n", encoding="utf-8")

    settings = load_settings(config_path)

    assert settings.api.cors_origins == ["http://example.com"]
