"""
Tests for building the effective configuration.
"""

import json
from pathlib import Path

import wdmanager.settings as default_settings
from wdmanager.local.config import load_config


def test_defaults_come_from_settings(tmp_path):
    config = load_config(tmp_path / "absent.json")
    assert config.selenium_version == default_settings.SELENIUM_VERSION
    assert config.out_dir == Path(default_settings.OUT_DIR)
    assert config.shutdown_url == "http://localhost:4444/selenium-server/driver/?cmd=shutDownSeleniumServer"


def test_overrides_file_applies_modifiable_keys_only(tmp_path):
    overrides = tmp_path / "wdmanager.json"
    overrides.write_text(json.dumps({
        "SELENIUM_VERSION": "2.45.0",
        "OUT_DIR": str(tmp_path / "drivers"),
        "SHUTDOWN_PATH": "/elsewhere",
        "NOT_A_SETTING": 1,
    }))

    config = load_config(overrides)

    assert config.selenium_version == "2.45.0"
    assert config.out_dir == tmp_path / "drivers"
    assert config.shutdown_path == default_settings.SHUTDOWN_PATH


def test_malformed_overrides_file_is_ignored(tmp_path):
    overrides = tmp_path / "wdmanager.json"
    overrides.write_text("{not json")
    assert load_config(overrides).selenium_version == default_settings.SELENIUM_VERSION


def test_command_line_beats_overrides_file(tmp_path):
    overrides = tmp_path / "wdmanager.json"
    overrides.write_text(json.dumps({"CHROMEDRIVER_VERSION": "2.11", "PROXY": "http://file:1"}))

    config = load_config(overrides, chromedriver_version="2.13", proxy=None, out_dir=str(tmp_path))

    assert config.chromedriver_version == "2.13"
    assert config.proxy == "http://file:1"
    assert config.out_dir == tmp_path


def test_override_values_take_the_type_of_their_default(tmp_path):
    overrides = tmp_path / "wdmanager.json"
    overrides.write_text(json.dumps({
        "DOWNLOAD_TIMEOUT": "45",
        "IGNORE_SSL": "true",
        "SELENIUM_PORT": "4445",
        "OUT_DIR": str(tmp_path),
    }))

    config = load_config(overrides)

    assert config.download_timeout == 45
    assert config.ignore_ssl is True
    assert config.selenium_port == 4445
    assert isinstance(config.out_dir, Path)


def test_unconvertible_override_is_ignored(tmp_path):
    overrides = tmp_path / "wdmanager.json"
    overrides.write_text(json.dumps({"DOWNLOAD_TIMEOUT": "soon"}))
    assert load_config(overrides).download_timeout == default_settings.DOWNLOAD_TIMEOUT
