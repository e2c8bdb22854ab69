"""
Bluetooth reference data, constants and value types.

The value types depend on :mod:`blueproxy.core.errors`, which itself imports
the constants here, so they are loaded lazily on first attribute access.
"""

from importlib import import_module as _imp
from typing import Any as _Any

from . import constants
from . import utils

__all__ = ["constants", "utils", "Address", "AddressType", "Modalias"]

_lazy_map = {
    "Address": "blueproxy.bt_ref.address",
    "AddressType": "blueproxy.bt_ref.address",
    "Modalias": "blueproxy.bt_ref.modalias",
}


def __getattr__(name: str) -> _Any:
    if name in _lazy_map:
        value = getattr(_imp(_lazy_map[name]), name)
        globals()[name] = value
        return value
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
