"""
Adapter D-Bus Interface

Typed proxy for one ``org.bluez.Adapter1`` object.  Every accessor is a fresh
round trip to the daemon; nothing is cached between calls.
"""

from __future__ import annotations

from typing import Any, List, Optional, Union

import dbus

from blueproxy.bt_ref.address import Address, AddressType
from blueproxy.bt_ref.constants import (
    ADAPTER_INTERFACE,
    BLUEZ_NAMESPACE,
    DEVICE_INTERFACE,
    DEVICE_PATH_PREFIX,
    SIGNATURE__CONNECT_DEVICE,
    SIGNATURE__REMOVE_DEVICE,
    UINT32_MAX,
)
from blueproxy.bt_ref.modalias import Modalias
from blueproxy.bt_ref.utils import dbus_to_python
from blueproxy.core.errors import InvalidArgumentError, ParseError
from blueproxy.core.log import get_logger
from blueproxy.dbuslayer.session import Session

__all__ = ["Adapter"]

logger = get_logger(__name__)


class Adapter:
    """Interface to a Bluetooth adapter such as ``hci0``."""

    __slots__ = ("_session", "_name", "_path")

    def __init__(self, session: Session, name: str):
        self._session = session
        self._name = name
        self._path = BLUEZ_NAMESPACE + name

    def __repr__(self) -> str:
        return f"Adapter(session={self._session!r}, name={self._name!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Adapter):
            return NotImplemented
        return self._session is other._session and self._path == other._path

    def __hash__(self) -> int:
        return hash((id(self._session), self._path))

    def copy(self) -> "Adapter":
        return Adapter(self._session, self._name)

    @property
    def name(self) -> str:
        """The adapter name, for example ``hci0``."""
        return self._name

    @property
    def dbus_path(self) -> str:
        """The adapter object path, for example ``/org/bluez/hci0``."""
        return self._path

    @property
    def session(self) -> Session:
        return self._session

    def device_path(self, address: Union[Address, str]) -> str:
        """Object path of the device with *address* under this adapter."""
        if not isinstance(address, Address):
            address = Address.parse(address)
        return f"{self._path}/{address.path_segment()}"

    # ------------------------------------------------------------------
    # Property primitives
    # ------------------------------------------------------------------
    async def _get_property(self, name: str) -> Any:
        value = await self._session.get_property(self._path, ADAPTER_INTERFACE, name)
        return dbus_to_python(value)

    async def _set_property(self, name: str, value: Any) -> None:
        logger.debug("Setting %s=%r on %s", name, value, self._path)
        await self._session.set_property(self._path, ADAPTER_INTERFACE, name, value)

    async def _get_str(self, name: str) -> str:
        value = await self._get_property(name)
        if not isinstance(value, str):
            raise ParseError(value, "str", f"property {name} of {self._path}")
        return value

    async def _get_bool(self, name: str) -> bool:
        value = await self._get_property(name)
        if not isinstance(value, bool):
            raise ParseError(value, "bool", f"property {name} of {self._path}")
        return value

    async def _get_u32(self, name: str) -> int:
        value = await self._get_property(name)
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= UINT32_MAX:
            raise ParseError(value, "uint32", f"property {name} of {self._path}")
        return value

    async def _get_str_list(self, name: str) -> List[str]:
        value = await self._get_property(name)
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ParseError(value, "list[str]", f"property {name} of {self._path}")
        return value

    async def _set_u32(self, name: str, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= UINT32_MAX:
            raise InvalidArgumentError(f"Set {name}", self._path, detail=f"{value!r} is not a uint32")
        await self._set_property(name, dbus.UInt32(value))

    async def _set_bool(self, name: str, value: bool) -> None:
        if not isinstance(value, bool):
            raise InvalidArgumentError(f"Set {name}", self._path, detail=f"{value!r} is not a bool")
        await self._set_property(name, dbus.Boolean(value))

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    async def address(self) -> str:
        """The Bluetooth adapter address."""
        return await self._get_str("Address")

    async def address_type(self) -> AddressType:
        """The Bluetooth address type.

        Dual-mode and BR/EDR only adapters report ``public``.  With privacy
        enabled this is the type of the identity address, not of the address
        used for connections.
        """
        value = await self._get_str("AddressType")
        return AddressType.parse(value)

    async def system_name(self) -> str:
        """The Bluetooth system name (pretty hostname)."""
        return await self._get_str("Name")

    async def alias(self) -> str:
        """The Bluetooth friendly name, the system name unless one was set."""
        return await self._get_str("Alias")

    async def set_alias(self, value: str) -> None:
        """Set the friendly name; an empty string resets it to the system name."""
        await self._set_property("Alias", dbus.String(value))

    async def device_class(self) -> int:
        """The Bluetooth class of device (``Class``)."""
        return await self._get_u32("Class")

    async def is_powered(self) -> bool:
        return await self._get_bool("Powered")

    async def set_powered(self, value: bool) -> None:
        """Switch the adapter on or off.

        Not persistent: after a restart or replug the adapter is off again.
        """
        await self._set_bool("Powered", value)

    async def is_discoverable(self) -> bool:
        return await self._get_bool("Discoverable")

    async def set_discoverable(self, value: bool) -> None:
        """Make the adapter visible to, or hidden from, remote scans.

        BlueZ refuses this while the adapter is powered off and switches it
        back off once a non-zero DiscoverableTimeout expires.
        """
        await self._set_bool("Discoverable", value)

    async def is_pairable(self) -> bool:
        return await self._get_bool("Pairable")

    async def set_pairable(self, value: bool) -> None:
        """Allow or refuse incoming pairing requests."""
        await self._set_bool("Pairable", value)

    async def pairable_timeout(self) -> int:
        """Pairable timeout in seconds, 0 meaning it never expires."""
        return await self._get_u32("PairableTimeout")

    async def set_pairable_timeout(self, value: int) -> None:
        await self._set_u32("PairableTimeout", value)

    async def discoverable_timeout(self) -> int:
        """Discoverable timeout in seconds, 0 meaning it never expires."""
        return await self._get_u32("DiscoverableTimeout")

    async def set_discoverable_timeout(self, value: int) -> None:
        await self._set_u32("DiscoverableTimeout", value)

    async def is_discovering(self) -> bool:
        """True while a device discovery procedure is active."""
        return await self._get_bool("Discovering")

    async def uuids(self) -> List[str]:
        """128-bit UUIDs of the available local services."""
        return await self._get_str_list("UUIDs")

    async def modalias(self) -> Modalias:
        """Local Device ID information in modalias format.

        Adapters without DMI/ACPI data do not export the property; the
        daemon's error is raised unchanged in that case.
        """
        value = await self._get_str("Modalias")
        return Modalias.parse(value)

    # ------------------------------------------------------------------
    # Methods
    # ------------------------------------------------------------------
    async def remove_device(self, device_path: str) -> None:
        """Remove the device object at *device_path* and its pairing information."""
        try:
            object_path = dbus.ObjectPath(device_path)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(
                "RemoveDevice", self._path, detail=f"{device_path!r} is not an object path"
            ) from e
        logger.debug("Removing %s from %s", device_path, self._path)
        await self._session.call_method(
            self._path,
            ADAPTER_INTERFACE,
            "RemoveDevice",
            SIGNATURE__REMOVE_DEVICE,
            (object_path,),
        )

    async def connect_device(
        self, address: Address, address_type: Optional[AddressType] = None
    ) -> str:
        """Connect to a device without running a discovery first.

        Returns once the physical link is up; service discovery and profile
        connection continue in the daemon.  Without *address_type* BlueZ
        creates a BR/EDR device.  Returns the device object path.
        """
        params = {"Address": dbus.String(str(address))}
        if address_type is not None:
            params["AddressType"] = dbus.String(str(address_type))
        logger.debug("Connecting %s via %s", address, self._path)
        path = await self._session.call_method(
            self._path,
            ADAPTER_INTERFACE,
            "ConnectDevice",
            SIGNATURE__CONNECT_DEVICE,
            (dbus.Dictionary(params, signature="sv"),),
        )
        return str(path)

    # ------------------------------------------------------------------
    # Devices
    # ------------------------------------------------------------------
    async def device_addresses(self) -> List[Address]:
        """Addresses of the devices BlueZ currently knows on this adapter.

        Order follows the daemon's reply.  One malformed device path fails
        the whole call with ParseError.
        """
        prefix = f"{self._path}/{DEVICE_PATH_PREFIX}"
        objects = await self._session.get_managed_objects()
        addresses = []
        for path, interfaces in objects.items():
            if not path.startswith(prefix) or DEVICE_INTERFACE not in interfaces:
                continue
            segment = path[len(self._path) + 1:]
            try:
                addresses.append(Address.from_path_segment(segment))
            except ParseError as e:
                raise ParseError(segment, "Address", f"device path {path}") from e
        return addresses
