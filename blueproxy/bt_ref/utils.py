"""
Bluetooth utility functions.
"""

import dbus

__all__ = [
    "dbus_to_python",
]


def dbus_to_python(data):
    # dbus.Boolean subclasses int, so it has to be checked before the integers
    if isinstance(data, dbus.Boolean):
        data = bool(data)
    elif isinstance(data, (dbus.String, dbus.ObjectPath, dbus.Signature)):
        data = str(data)
    elif isinstance(
        data,
        (
            dbus.Byte,
            dbus.Int16,
            dbus.UInt16,
            dbus.Int32,
            dbus.UInt32,
            dbus.Int64,
            dbus.UInt64,
        ),
    ):
        data = int(data)
    elif isinstance(data, dbus.Double):
        data = float(data)
    elif isinstance(data, (dbus.Array, list)):
        data = [dbus_to_python(value) for value in data]
    elif isinstance(data, dbus.Struct):
        data = tuple(dbus_to_python(value) for value in data)
    elif isinstance(data, (dbus.Dictionary, dict)):
        new_data = dict()
        for key in data.keys():
            new_data[dbus_to_python(key)] = dbus_to_python(data[key])
        data = new_data
    return data
