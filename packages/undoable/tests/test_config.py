"""Tests for undoable.config — settings defaults, file and environment layers"""
import json
import logging

import pytest

from undoable import SettingsError, UndoableSettings, load_settings
from undoable.config import ENV_LOG_LEVEL, ENV_SNAPSHOT_MODE


class TestUndoableSettings:
    def test_defaults(self):
        s = UndoableSettings()
        assert s.snapshot_mode == "reference"
        assert s.log_level == "WARNING"
        assert s.log_level_value == logging.WARNING

    def test_from_dict_accepts_camel_case(self):
        s = UndoableSettings.from_dict({"snapshotMode": "deepcopy", "logLevel": "debug"})
        assert s.snapshot_mode == "deepcopy"
        assert s.log_level == "DEBUG"

    def test_from_dict_ignores_unknown_keys(self):
        s = UndoableSettings.from_dict({"theme": "dark", "snapshot_mode": "reference"})
        assert s == UndoableSettings()

    def test_invalid_snapshot_mode(self):
        with pytest.raises(SettingsError, match="Unknown snapshot mode"):
            UndoableSettings.from_dict({"snapshot_mode": "diff"})

    def test_invalid_log_level(self):
        with pytest.raises(SettingsError, match="Unknown log level"):
            UndoableSettings.from_dict({"log_level": "LOUD"})

    def test_round_trip_dict(self):
        s = UndoableSettings(snapshot_mode="deepcopy", log_level="INFO")
        assert UndoableSettings.from_dict(s.to_dict()) == s


class TestLoadSettings:
    def test_defaults_without_file_or_env(self):
        assert load_settings(env={}) == UndoableSettings()

    def test_missing_file_is_not_an_error(self, tmp_path):
        assert load_settings(str(tmp_path / "nope.json"), env={}) == UndoableSettings()

    def test_file_values(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"snapshotMode": "deepcopy"}))
        s = load_settings(str(path), env={})
        assert s.snapshot_mode == "deepcopy"
        assert s.log_level == "WARNING"

    def test_env_overrides_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"snapshot_mode": "deepcopy", "log_level": "INFO"}))
        s = load_settings(str(path), env={ENV_SNAPSHOT_MODE: "Reference", ENV_LOG_LEVEL: "error"})
        assert s.snapshot_mode == "reference"
        assert s.log_level == "ERROR"

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv(ENV_SNAPSHOT_MODE, "deepcopy")
        assert load_settings().snapshot_mode == "deepcopy"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        with pytest.raises(SettingsError) as exc_info:
            load_settings(str(path), env={})
        assert str(path) in str(exc_info.value)

    def test_non_object_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]")
        with pytest.raises(SettingsError, match="JSON object"):
            load_settings(str(path), env={})

    def test_invalid_env_value(self):
        with pytest.raises(SettingsError):
            load_settings(env={ENV_SNAPSHOT_MODE: "bogus"})
