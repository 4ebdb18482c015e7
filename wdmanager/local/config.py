import json
import logging
from pathlib import Path
from dataclasses import dataclass, replace
from typing import Dict, Any, Optional

import wdmanager.settings as default_settings

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManagerConfig:
    """
    The effective configuration for a single invocation.

    Built once by `load_config` and handed explicitly to every component that
    needs it. Nothing downstream reads `settings.py` directly.
    """
    out_dir: Path
    selenium_version: str
    chromedriver_version: str
    iedriver_version: str
    selenium_base_url: str = default_settings.SELENIUM_BASE_URL
    chromedriver_base_url: str = default_settings.CHROMEDRIVER_BASE_URL
    proxy: Optional[str] = None
    ignore_ssl: bool = False
    download_timeout: float = default_settings.DOWNLOAD_TIMEOUT
    download_chunk_size: int = default_settings.DOWNLOAD_CHUNK_SIZE
    java_executable: str = default_settings.JAVA_EXECUTABLE
    selenium_port: Optional[int] = None
    default_selenium_port: int = default_settings.DEFAULT_SELENIUM_PORT
    shutdown_path: str = default_settings.SHUTDOWN_PATH
    shutdown_request_timeout: float = default_settings.SHUTDOWN_REQUEST_TIMEOUT

    @property
    def shutdown_url(self) -> str:
        return f"http://localhost:{self.default_selenium_port}{self.shutdown_path}"

    def with_overrides(self, **values: Any) -> "ManagerConfig":
        """Returns a copy with the given non-None values applied."""
        return replace(self, **{k: v for k, v in values.items() if v is not None})


# Maps the uppercase setting names onto ManagerConfig fields.
_SETTING_FIELDS = {
    "OUT_DIR": "out_dir",
    "SELENIUM_VERSION": "selenium_version",
    "CHROMEDRIVER_VERSION": "chromedriver_version",
    "IEDRIVER_VERSION": "iedriver_version",
    "SELENIUM_BASE_URL": "selenium_base_url",
    "CHROMEDRIVER_BASE_URL": "chromedriver_base_url",
    "PROXY": "proxy",
    "IGNORE_SSL": "ignore_ssl",
    "DOWNLOAD_TIMEOUT": "download_timeout",
    "DOWNLOAD_CHUNK_SIZE": "download_chunk_size",
    "JAVA_EXECUTABLE": "java_executable",
    "SELENIUM_PORT": "selenium_port",
    "DEFAULT_SELENIUM_PORT": "default_selenium_port",
    "SHUTDOWN_PATH": "shutdown_path",
    "SHUTDOWN_REQUEST_TIMEOUT": "shutdown_request_timeout",
}


# Settings whose default is None, so their type cannot be read off the default.
_OPTIONAL_SETTING_TYPES = {
    "PROXY": str,
    "SELENIUM_PORT": int,
}


def _coerce(key: str, value: Any, original_value: Any) -> Any:
    """Converts an override to the type of the setting's default value."""
    if value is None:
        return None
    if isinstance(original_value, bool):
        return str(value).lower() in ('true', '1', 't', 'yes', 'y')
    if isinstance(original_value, Path):
        return Path(value)
    if original_value is not None:
        return type(original_value)(value)
    if key in _OPTIONAL_SETTING_TYPES:
        return _OPTIONAL_SETTING_TYPES[key](value)
    return value


def _load_defaults() -> Dict[str, Any]:
    """Loads the known uppercase attributes from settings.py as the baseline."""
    return {key: getattr(default_settings, key) for key in _SETTING_FIELDS}


def _load_overrides(overrides_path: Path, values: Dict[str, Any]) -> None:
    """
    Applies settings from a JSON overrides file onto `values` in place.

    Only keys listed in `MODIFIABLE_SETTINGS` are honored; anything else is
    logged and ignored. A missing file is not an error.

    :param overrides_path: Path to the JSON file.
    :param values: The settings dictionary to update.
    """
    if not overrides_path.exists():
        return

    try:
        with overrides_path.open('r') as f:
            overrides = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        log.error(f"Failed to load or parse overrides file '{overrides_path}': {e}")
        return

    if not isinstance(overrides, dict):
        log.error(f"Overrides file '{overrides_path}' must contain a JSON object. Ignoring.")
        return

    log.info(f"Loading configuration overrides from {overrides_path}")
    for key, value in overrides.items():
        if key not in values:
            log.warning(f"Override setting '{key}' not found in default settings. Ignoring.")
            continue
        if key not in default_settings.MODIFIABLE_SETTINGS:
            log.warning(f"Attempted to override non-modifiable setting '{key}'. Ignoring.")
            continue
        try:
            values[key] = _coerce(key, value, values[key])
        except (ValueError, TypeError) as e:
            log.error(f"Could not convert value '{value}' for setting '{key}': {e}. Ignoring.")
            continue
        log.debug(f"Overridden setting: {key} = {values[key]}")


def load_config(overrides_path: Optional[Path] = None, **cli_values: Any) -> ManagerConfig:
    """
    Builds the effective configuration.

    Precedence, lowest first: `settings.py` defaults (which already include
    `.env`/environment values), the JSON overrides file, then explicit values
    from the command line. `None` command-line values are ignored.

    :param overrides_path: JSON overrides file; defaults to `OVERRIDES_JSON_PATH`.
    :param cli_values: ManagerConfig field names mapped to command-line values.
    :return ManagerConfig: The immutable configuration value.
    """
    values = _load_defaults()
    _load_overrides(overrides_path or default_settings.OVERRIDES_JSON_PATH, values)

    fields = {_SETTING_FIELDS[key]: value for key, value in values.items()}
    fields["out_dir"] = Path(fields["out_dir"])
    config = ManagerConfig(**fields)
    if cli_values.get("out_dir") is not None:
        cli_values["out_dir"] = Path(cli_values["out_dir"])
    return config.with_overrides(**cli_values)
