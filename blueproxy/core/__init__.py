"""
Core package initialisation for blueproxy.

Kept lightweight: only the error classes are re-exported here.
"""

from blueproxy.core.errors import (
    BlueproxyError,
    ConfigurationError,
    ParseError,
    RemoteCallError,
)

__all__ = [
    "BlueproxyError",
    "ConfigurationError",
    "ParseError",
    "RemoteCallError",
]
