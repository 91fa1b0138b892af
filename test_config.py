#!/usr/bin/env python3
"""
Tests for configuration loading
"""

import pytest

from ma3beatgrid.config import ConfigManager, ConfigurationError


def test_defaults_without_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = ConfigManager()

    assert config.loaded_from is None
    assert config.default_ppq == 480
    assert config.default_bpm == 120.0
    assert config.round_bpm is False
    assert config.chunk_size == 1024
    assert config.preview_rows == 200
    assert config.enable_system_logging is False
    assert config.plugin_options["author"] == "PJ Carruth"
    assert config.plugin_options["data_version"] == "2.3.1.1"
    assert config.conversion_options == {
        "default_ppq": 480,
        "default_bpm": 120.0,
        "round_bpm": False,
    }


def test_explicit_missing_file_gets_default_written(tmp_path):
    path = tmp_path / "custom.ini"
    config = ConfigManager(str(path))

    assert path.exists()
    assert "[BEATGRID]" in path.read_text(encoding="utf-8")
    assert config.chunk_size == 1024


def test_values_from_file(tmp_path):
    path = tmp_path / "beatgrid.ini"
    path.write_text(
        "[BEATGRID]\n"
        "chunk_size = 512\n"
        "round_bpm = yes\n"
        "default_bpm = 90.5\n"
        "plugin_author = Lighting Desk\n",
        encoding="utf-8",
    )
    config = ConfigManager(str(path))

    assert config.loaded_from == str(path)
    assert config.chunk_size == 512
    assert config.round_bpm is True
    assert config.default_bpm == 90.5
    assert config.plugin_options["author"] == "Lighting Desk"
    # Keys not in the file keep their defaults
    assert config.default_ppq == 480


def test_working_directory_config_is_picked_up(tmp_path, monkeypatch):
    (tmp_path / "beatgrid.ini").write_text("[BEATGRID]\npreview_rows = 12\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert ConfigManager().preview_rows == 12


def test_malformed_values_fall_back(tmp_path):
    path = tmp_path / "beatgrid.ini"
    path.write_text(
        "[BEATGRID]\nchunk_size = lots\nround_bpm = maybe\ndefault_bpm = fast\n",
        encoding="utf-8",
    )
    config = ConfigManager(str(path))

    assert config.chunk_size == 1024
    assert config.round_bpm is False
    assert config.default_bpm == 120.0


def test_unparseable_file_raises(tmp_path):
    path = tmp_path / "broken.ini"
    path.write_text("no section header here\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        ConfigManager(str(path))


def test_runtime_override(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = ConfigManager()
    config.set("round_bpm", "true")
    assert config.round_bpm is True
