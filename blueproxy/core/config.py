"""
Core configuration settings for blueproxy.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Union

import yaml

from blueproxy.bt_ref.constants import ADAPTER_NAME
from blueproxy.core.errors import ConfigurationError

# Base paths
DATA_DIR = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local/share")) / "blueproxy"
CONFIG_DIR = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config")) / "blueproxy"

# Logging configuration
LOG_DIR = DATA_DIR / "logs"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

# Log types
LOG__GENERAL = "GENERAL"
LOG__DEBUG = "DEBUG"

# Default adapter
DEFAULT_ADAPTER = ADAPTER_NAME

# Timeout applied to every D-Bus call made through a session (seconds)
DBUS_TIMEOUT = 30.0

DEFAULT_LOG_LEVEL = "INFO"

# Environment overrides
ENV_ADAPTER = "BLUEPROXY_ADAPTER"
ENV_DBUS_TIMEOUT = "BLUEPROXY_DBUS_TIMEOUT"
ENV_LOG_LEVEL = "BLUEPROXY_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    adapter: str = DEFAULT_ADAPTER
    dbus_timeout: float = DBUS_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL


def _timeout(value, source: str) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{source}: dbus_timeout must be a number, got {value!r}")
    if timeout <= 0:
        raise ConfigurationError(f"{source}: dbus_timeout must be positive, got {timeout}")
    return timeout


def _log_level(value, source: str) -> str:
    level = str(value).upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError(f"{source}: unknown log_level {value!r}")
    return level


def _adapter(value, source: str) -> str:
    if not isinstance(value, str) or not value or "/" in value:
        raise ConfigurationError(f"{source}: invalid adapter name {value!r}")
    return value


def _read_file(path: Path) -> dict:
    try:
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except FileNotFoundError:
        return {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: top level must be a mapping")
    return data


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Build settings from defaults, the YAML config file and the environment.

    Later sources win.  A missing file is not an error.
    """
    path = Path(path) if path else CONFIG_FILE
    settings = Settings()

    data = _read_file(path)
    unknown = set(data) - {"adapter", "dbus_timeout", "log_level"}
    if unknown:
        raise ConfigurationError(f"{path}: unknown keys {sorted(unknown)}")
    src = str(path)
    if "adapter" in data:
        settings = replace(settings, adapter=_adapter(data["adapter"], src))
    if "dbus_timeout" in data:
        settings = replace(settings, dbus_timeout=_timeout(data["dbus_timeout"], src))
    if "log_level" in data:
        settings = replace(settings, log_level=_log_level(data["log_level"], src))

    if os.getenv(ENV_ADAPTER):
        settings = replace(settings, adapter=_adapter(os.environ[ENV_ADAPTER], ENV_ADAPTER))
    if os.getenv(ENV_DBUS_TIMEOUT):
        settings = replace(
            settings, dbus_timeout=_timeout(os.environ[ENV_DBUS_TIMEOUT], ENV_DBUS_TIMEOUT)
        )
    if os.getenv(ENV_LOG_LEVEL):
        settings = replace(
            settings, log_level=_log_level(os.environ[ENV_LOG_LEVEL], ENV_LOG_LEVEL)
        )
    return settings
