"""D-Bus session shared by every proxy.

A :class:`Session` owns one system bus connection and the call timeout applied
to every request made through it.  Proxies keep a plain reference to the
session and never close it.

dbus-python only offers blocking calls without a running GLib main loop, so
each call is executed in a worker thread and awaited from the event loop.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Any, Dict, List, Optional, Tuple

import dbus
import dbus.exceptions

from blueproxy.bt_ref.constants import (
    ADAPTER_INTERFACE,
    BLUEZ_NAMESPACE,
    BLUEZ_SERVICE_NAME,
    DBUS_OM_IFACE,
    DBUS_PROPERTIES,
    DBUS_ROOT_PATH,
    SIGNATURE__GET,
    SIGNATURE__SET,
)
from blueproxy.bt_ref.utils import dbus_to_python
from blueproxy.core.config import Settings, load_settings
from blueproxy.core.errors import UnknownObjectError, map_dbus_error
from blueproxy.core.log import get_logger

__all__ = ["Session"]

logger = get_logger(__name__)


class Session:
    """Handle to one BlueZ system bus connection."""

    def __init__(
        self,
        bus: Optional[dbus.Bus] = None,
        timeout: Optional[float] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or load_settings()
        self._bus = bus
        self._owns_bus = bus is None
        self._bus_lock = threading.Lock()
        self._timeout = float(timeout if timeout is not None else self._settings.dbus_timeout)

    def __repr__(self) -> str:
        return f"Session(service={BLUEZ_SERVICE_NAME!r}, timeout={self._timeout})"

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------
    def connection(self) -> dbus.Bus:
        """The underlying bus, connecting to the system bus on first use."""
        # Worker threads race here on the first calls of a fresh session
        with self._bus_lock:
            if self._bus is None:
                logger.debug("Connecting to the system bus")
                try:
                    self._bus = dbus.SystemBus()
                except dbus.exceptions.DBusException as e:
                    raise map_dbus_error(e, "Connect to system bus") from e
            return self._bus

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def settings(self) -> Settings:
        return self._settings

    def close(self) -> None:
        """Close the bus if this session opened it."""
        with self._bus_lock:
            if self._owns_bus and self._bus is not None:
                logger.debug("Closing system bus connection")
                self._bus.close()
                self._bus = None

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    async def __aenter__(self) -> "Session":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Call primitives
    # ------------------------------------------------------------------
    def _call_blocking(
        self,
        path: str,
        interface: str,
        member: str,
        signature: str,
        args: Tuple,
        operation: str,
    ) -> Any:
        bus = self.connection()
        logger.debug("Calling %s.%s on %s", interface, member, path)
        try:
            return bus.call_blocking(
                BLUEZ_SERVICE_NAME,
                path,
                interface,
                member,
                signature,
                args,
                timeout=self._timeout,
            )
        except dbus.exceptions.DBusException as e:
            error = map_dbus_error(e, operation, path)
            logger.debug("%s: %s", type(error).__name__, error)
            raise error from e

    async def call_method(
        self,
        path: str,
        interface: str,
        member: str,
        signature: str = "",
        args: Tuple = (),
    ) -> Any:
        """Invoke *member* on *interface* of the object at *path*."""
        return await asyncio.to_thread(
            self._call_blocking, path, interface, member, signature, args, member
        )

    async def get_property(self, path: str, interface: str, name: str) -> Any:
        """Return the raw dbus-python value of a property."""
        return await asyncio.to_thread(
            self._call_blocking,
            path,
            DBUS_PROPERTIES,
            "Get",
            SIGNATURE__GET,
            (interface, name),
            f"Get {name}",
        )

    async def set_property(self, path: str, interface: str, name: str, value: Any) -> None:
        """Set a property.  *value* must already carry its D-Bus type."""
        await asyncio.to_thread(
            self._call_blocking,
            path,
            DBUS_PROPERTIES,
            "Set",
            SIGNATURE__SET,
            (interface, name, value),
            f"Set {name}",
        )

    async def get_managed_objects(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        """Return the daemon's object tree as ``{path: {interface: properties}}``.

        Keys keep the order of the reply.
        """
        reply = await asyncio.to_thread(
            self._call_blocking,
            DBUS_ROOT_PATH,
            DBUS_OM_IFACE,
            "GetManagedObjects",
            "",
            (),
            "GetManagedObjects",
        )
        return dbus_to_python(reply)

    # ------------------------------------------------------------------
    # Adapters
    # ------------------------------------------------------------------
    def adapter(self, name: Optional[str] = None):
        """Proxy for the adapter *name* (configured default when omitted)."""
        from blueproxy.dbuslayer.adapter import Adapter

        return Adapter(self, name or self._settings.adapter)

    async def adapter_names(self) -> List[str]:
        """Names of the adapters currently exported by the daemon."""
        names = []
        for path, interfaces in (await self.get_managed_objects()).items():
            if ADAPTER_INTERFACE not in interfaces:
                continue
            if not path.startswith(BLUEZ_NAMESPACE):
                continue
            name = path[len(BLUEZ_NAMESPACE):]
            if name and "/" not in name:
                names.append(name)
        return names

    async def default_adapter(self):
        """The configured adapter if present, otherwise the first one found."""
        names = await self.adapter_names()
        if not names:
            raise UnknownObjectError("Find adapter", BLUEZ_NAMESPACE, detail="no adapter available")
        if self._settings.adapter in names:
            return self.adapter(self._settings.adapter)
        logger.info("Adapter %s not present, using %s", self._settings.adapter, names[0])
        return self.adapter(names[0])
