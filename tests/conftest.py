"""Shared fixtures: an in-memory stand-in for the BlueZ system bus."""

import asyncio

import dbus
import dbus.exceptions
import pytest

from blueproxy.bt_ref.constants import (
    ADAPTER_INTERFACE,
    BLUEZ_SERVICE_NAME,
    DBUS_OM_IFACE,
    DBUS_PROPERTIES,
    DEVICE_INTERFACE,
)
from blueproxy.core.config import Settings
from blueproxy.dbuslayer.session import Session

ADAPTER_PATH = "/org/bluez/hci0"
DEVICE_PATH = ADAPTER_PATH + "/dev_AA_BB_CC_DD_EE_FF"

_READ_WRITE = {
    "Alias",
    "Powered",
    "Discoverable",
    "Pairable",
    "PairableTimeout",
    "DiscoverableTimeout",
}


def _error(name, message=""):
    return dbus.exceptions.DBusException(message, name=name)


def adapter_properties(**overrides):
    props = {
        "Address": dbus.String("00:1A:7D:DA:71:13"),
        "AddressType": dbus.String("public"),
        "Name": dbus.String("kitchen"),
        "Alias": dbus.String("kitchen"),
        "Class": dbus.UInt32(0x7C010C),
        "Powered": dbus.Boolean(True),
        "Discoverable": dbus.Boolean(False),
        "DiscoverableTimeout": dbus.UInt32(180),
        "Pairable": dbus.Boolean(True),
        "PairableTimeout": dbus.UInt32(0),
        "Discovering": dbus.Boolean(False),
        "UUIDs": dbus.Array(
            [
                dbus.String("0000110e-0000-1000-8000-00805f9b34fb"),
                dbus.String("00001800-0000-1000-8000-00805f9b34fb"),
            ],
            signature="s",
        ),
        "Modalias": dbus.String("usb:v1D6Bp0246d053F"),
    }
    props.update(overrides)
    return props


class FakeBus:
    """Implements ``call_blocking`` the way bluetoothd answers it."""

    def __init__(self, objects=None):
        self.objects = objects if objects is not None else {
            ADAPTER_PATH: {
                ADAPTER_INTERFACE: adapter_properties(),
                DBUS_PROPERTIES: {},
            },
            DEVICE_PATH: {
                DEVICE_INTERFACE: {"Address": dbus.String("AA:BB:CC:DD:EE:FF")},
            },
        }
        self.calls = []
        self.closed = False
        self.fail_with = None

    def close(self):
        self.closed = True

    def call_blocking(self, bus_name, object_path, dbus_interface, method,
                      signature, args, timeout=-1.0, **kwargs):
        self.calls.append(
            dict(
                bus_name=bus_name,
                path=object_path,
                interface=dbus_interface,
                method=method,
                signature=signature,
                args=args,
                timeout=timeout,
            )
        )
        assert bus_name == BLUEZ_SERVICE_NAME
        if self.fail_with is not None:
            raise self.fail_with

        if dbus_interface == DBUS_OM_IFACE and method == "GetManagedObjects":
            assert object_path == "/"
            return dbus.Dictionary(
                {dbus.ObjectPath(p): dict(ifaces) for p, ifaces in self.objects.items()},
                signature="oa{sa{sv}}",
            )

        if object_path not in self.objects:
            raise _error(
                "org.freedesktop.DBus.Error.UnknownObject",
                f"Method \"{method}\" with signature \"{signature}\" on interface "
                f"\"{dbus_interface}\" doesn't exist",
            )
        obj = self.objects[object_path]

        if dbus_interface == DBUS_PROPERTIES:
            iface, name = args[0], args[1]
            if iface not in obj:
                raise _error("org.freedesktop.DBus.Error.InvalidArgs", "No such interface")
            props = obj[iface]
            if method == "Get":
                if name not in props:
                    raise _error(
                        "org.freedesktop.DBus.Error.InvalidArgs",
                        f"No such property '{name}'",
                    )
                return props[name]
            if method == "Set":
                if name not in _READ_WRITE:
                    raise _error("org.freedesktop.DBus.Error.PropertyReadOnly", name)
                value = args[2]
                if name == "Discoverable" and value and not props["Powered"]:
                    raise _error("org.bluez.Error.NotReady", "Resource Not Ready")
                if name == "Alias" and value == "":
                    value = props["Name"]
                props[name] = value
                return None

        if dbus_interface == ADAPTER_INTERFACE:
            if method == "RemoveDevice":
                path = str(args[0])
                if path not in self.objects or DEVICE_INTERFACE not in self.objects[path]:
                    raise _error("org.bluez.Error.DoesNotExist", "Does Not Exist")
                for known in list(self.objects):
                    if known == path or known.startswith(path + "/"):
                        del self.objects[known]
                return None
            if method == "ConnectDevice":
                params = args[0]
                if "Address" not in params:
                    raise _error("org.bluez.Error.InvalidArguments", "Invalid arguments")
                path = object_path + "/dev_" + str(params["Address"]).replace(":", "_")
                if path in self.objects:
                    raise _error("org.bluez.Error.AlreadyExists", "Already Exists")
                self.objects[path] = {
                    DEVICE_INTERFACE: {"Address": dbus.String(params["Address"])}
                }
                return dbus.ObjectPath(path)

        raise _error("org.freedesktop.DBus.Error.UnknownMethod", method)


@pytest.fixture
def bus():
    return FakeBus()


@pytest.fixture
def session(bus):
    return Session(bus=bus, timeout=5.0, settings=Settings())


@pytest.fixture
def adapter(session):
    return session.adapter("hci0")


def run(coro):
    return asyncio.run(coro)
