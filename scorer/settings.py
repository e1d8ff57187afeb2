from __future__ import annotations

import json
import os
from pathlib import Path

from scorer.db.database import get_app_data_dir, get_default_database_path

SETTINGS_FILENAME = "settings.json"
DEFAULT_LOG_LEVEL = "INFO"


def _get_app_settings_path() -> Path:
    return get_app_data_dir() / SETTINGS_FILENAME


def _read_settings() -> dict[str, object]:
    path = _get_app_settings_path()
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}
    if isinstance(data, dict):
        return data
    return {}


def get_database_path() -> str:
    env_path = os.environ.get("SCORER_DB_PATH")
    if env_path:
        return env_path
    return str(_read_settings().get("database_path") or get_default_database_path())


def get_log_level() -> str:
    env_level = os.environ.get("SCORER_LOG_LEVEL")
    if env_level:
        return env_level.upper()
    return str(_read_settings().get("log_level") or DEFAULT_LOG_LEVEL).upper()
