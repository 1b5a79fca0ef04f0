"""
Settings for undoable.

Settings come from three layers, later layers winning:
defaults -> JSON settings file -> UNDOABLE_* environment variables.
"""
from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import asdict, dataclass
from typing import Any, Mapping

from .errors import SettingsError

SNAPSHOT_MODES = ("reference", "deepcopy")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENV_SNAPSHOT_MODE = "UNDOABLE_SNAPSHOT_MODE"
ENV_LOG_LEVEL = "UNDOABLE_LOG_LEVEL"

DEFAULT_SETTINGS_FILE = os.path.join(os.path.expanduser("~"), ".undoable", "settings.json")


@dataclass
class UndoableSettings:
    snapshot_mode: str = "reference"  # "reference" | "deepcopy"
    log_level: str = "WARNING"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UndoableSettings":
        known = cls.__dataclass_fields__.keys()
        normalized = {_snake_case(k): v for k, v in data.items()}
        filtered = {k: v for k, v in normalized.items() if k in known and v is not None}
        settings = cls(**filtered)
        settings.validate()
        return settings

    def validate(self) -> None:
        if self.snapshot_mode not in SNAPSHOT_MODES:
            raise SettingsError(
                f"Unknown snapshot mode {self.snapshot_mode!r} (expected one of {', '.join(SNAPSHOT_MODES)})"
            )
        if str(self.log_level).upper() not in LOG_LEVELS:
            raise SettingsError(f"Unknown log level {self.log_level!r}")
        self.log_level = str(self.log_level).upper()

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def _snake_case(key: str) -> str:
    """snapshotMode -> snapshot_mode; snake_case keys pass through."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _load_file(path: str) -> dict[str, Any]:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise SettingsError(str(e), path=path) from e
    if not isinstance(raw, dict):
        raise SettingsError("settings file must contain a JSON object", path=path)
    return raw


def load_settings(
    path: str | None = None,
    env: Mapping[str, str] | None = None,
) -> UndoableSettings:
    """
    Build settings from defaults, an optional JSON file and the environment.

    A missing file is not an error; unreadable JSON or invalid values raise
    SettingsError.
    """
    env = os.environ if env is None else env
    merged: dict[str, Any] = UndoableSettings().to_dict()

    if path:
        for key, value in _load_file(path).items():
            if value is not None:
                merged[_snake_case(key)] = value

    if env.get(ENV_SNAPSHOT_MODE):
        merged["snapshot_mode"] = env[ENV_SNAPSHOT_MODE].strip().lower()
    if env.get(ENV_LOG_LEVEL):
        merged["log_level"] = env[ENV_LOG_LEVEL].strip()

    return UndoableSettings.from_dict(merged)
