"""
blueproxy - typed asyncio proxies for BlueZ adapters over D-Bus
"""

__version__ = "0.3.0"

# ---------------------------------------------------------------------------
# Initialise logging on *package import* so every code path (even when the
# CLI is not used) has its handlers attached.
# ---------------------------------------------------------------------------
import importlib as _importlib

_importlib.import_module("blueproxy.core.log")  # noqa: F401 side-effect import

from blueproxy.bt_ref.address import Address, AddressType  # noqa: E402
from blueproxy.bt_ref.modalias import Modalias  # noqa: E402
from blueproxy.core.errors import (  # noqa: E402
    BlueproxyError,
    ParseError,
    RemoteCallError,
)
from blueproxy.dbuslayer import Adapter, Session  # noqa: E402

__all__ = [
    "Address",
    "AddressType",
    "Modalias",
    "Adapter",
    "Session",
    "BlueproxyError",
    "ParseError",
    "RemoteCallError",
]
