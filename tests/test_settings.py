from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from scorer import settings
from scorer.log_setup import LOGGER_NAME, setup_logging


@pytest.fixture
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    settings_path = tmp_path / "settings.json"
    monkeypatch.setattr(settings, "_get_app_settings_path", lambda: settings_path)
    monkeypatch.setattr(settings, "get_default_database_path", lambda: tmp_path / "default.db")
    monkeypatch.delenv("SCORER_DB_PATH", raising=False)
    monkeypatch.delenv("SCORER_LOG_LEVEL", raising=False)
    return settings_path


def test_database_path_defaults_and_overrides(
    isolated_settings: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    assert settings.get_database_path() == str(tmp_path / "default.db")

    isolated_settings.write_text(json.dumps({"database_path": str(tmp_path / "saved.db")}), encoding="utf-8")
    assert settings.get_database_path() == str(tmp_path / "saved.db")

    monkeypatch.setenv("SCORER_DB_PATH", str(tmp_path / "env.db"))
    assert settings.get_database_path() == str(tmp_path / "env.db")


def test_broken_settings_file_falls_back(isolated_settings: Path, tmp_path: Path) -> None:
    isolated_settings.write_text("{broken", encoding="utf-8")
    assert settings.get_database_path() == str(tmp_path / "default.db")
    assert settings.get_log_level() == "INFO"


def test_log_level_from_env(isolated_settings: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCORER_LOG_LEVEL", "debug")
    assert settings.get_log_level() == "DEBUG"


def test_setup_logging_is_idempotent() -> None:
    logger = setup_logging("WARNING")
    handlers = list(logger.handlers)

    again = setup_logging("DEBUG")

    assert again is logging.getLogger(LOGGER_NAME)
    assert again.handlers == handlers
    assert len(handlers) == 1
    assert again.level == logging.DEBUG
