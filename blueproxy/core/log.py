"""
Core logging functionality for blueproxy.

Records go to per-category files under the per-user data directory.  When that
directory cannot be created the package logger only carries a NullHandler and
the application's own logging configuration decides what happens to records.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from . import config

# Re-export log type constants for external modules
LOG__GENERAL = config.LOG__GENERAL
LOG__DEBUG = config.LOG__DEBUG

_LOG_PATHS: Dict[str, Path] = {
    LOG__GENERAL: config.LOG_DIR / "general.log",
    LOG__DEBUG: config.LOG_DIR / "debug.log",
}

_formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

# Root logger for blueproxy
_logger = logging.getLogger("blueproxy")
_logger.setLevel(logging.INFO)
_logger.addHandler(logging.NullHandler())

_handlers: Dict[str, logging.Handler] = {}
try:
    config.LOG_DIR.mkdir(parents=True, exist_ok=True)
    for log_type, path in _LOG_PATHS.items():
        handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
        handler.setFormatter(_formatter)
        _handlers[log_type] = handler
except OSError:
    _handlers.clear()

# General file only takes INFO and above; debug file takes everything
if LOG__GENERAL in _handlers:
    _handlers[LOG__GENERAL].setLevel(logging.INFO)
for handler in _handlers.values():
    _logger.addHandler(handler)


def set_level(level: Union[int, str]) -> None:
    """Set the level of the package root logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    _logger.setLevel(level)


def print_and_log(output_string: str, log_type: str = LOG__GENERAL) -> None:
    """Print to stdout and log to the specified log type."""
    if log_type != LOG__DEBUG:
        print(output_string)
        _logger.info(output_string)
    else:
        _logger.debug(output_string)


# Modern interface
def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger with the specified name.

    Names already under the ``blueproxy`` namespace are used as-is so that
    ``get_logger(__name__)`` does not nest the package name twice.
    """
    if not name:
        return _logger
    if name == "blueproxy" or name.startswith("blueproxy."):
        return logging.getLogger(name)
    return _logger.getChild(name)
