#!/usr/bin/python3

"""Core error classes for blueproxy.

Two families reach callers: :class:`RemoteCallError` for anything the bus or
the BlueZ daemon rejects, and :class:`ParseError` for a reply that arrived but
cannot be decoded into the expected type.
"""

from __future__ import annotations

from typing import Any, Optional

import dbus.exceptions

from blueproxy.bt_ref.constants import (
    RESULT_ERR,
    RESULT_ERR_ACCESS_DENIED,
    RESULT_ERR_ACTION_IN_PROGRESS,
    RESULT_ERR_BAD_ARGS,
    RESULT_ERR_CONFIG,
    RESULT_ERR_NO_REPLY,
    RESULT_ERR_NOT_SUPPORTED,
    RESULT_ERR_PARSE,
    RESULT_ERR_UNKNOWN_OBJECT,
    RESULT_ERR_UNKNOWN_SERVCE,
    RESULT_ERR_WRONG_STATE,
)


class BlueproxyError(Exception):
    """Base exception for the package.

    The `.code` attribute carries one of the RESULT_* values from
    :mod:`blueproxy.bt_ref.constants`.
    """

    code = RESULT_ERR

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class RemoteCallError(BlueproxyError):
    """Raised when a D-Bus call fails in the transport or in the daemon."""

    def __init__(
        self,
        operation: str,
        path: Optional[str] = None,
        dbus_name: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        message = f"{operation} failed"
        if path:
            message += f" on {path}"
        if dbus_name:
            message += f": {dbus_name}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)
        self.operation = operation
        self.path = path
        self.dbus_name = dbus_name
        self.detail = detail


class UnknownObjectError(RemoteCallError):
    """Raised when the object, interface, method or property does not exist."""

    code = RESULT_ERR_UNKNOWN_OBJECT


class InvalidArgumentError(RemoteCallError):
    """Raised when invalid arguments are provided."""

    code = RESULT_ERR_BAD_ARGS


class NotPermittedError(RemoteCallError):
    """Raised when an operation is not permitted or not authorized."""

    code = RESULT_ERR_ACCESS_DENIED


class NotReadyError(RemoteCallError):
    """Raised when the adapter is not in a state that allows the operation."""

    code = RESULT_ERR_WRONG_STATE


class InProgressError(RemoteCallError):
    """Raised when an operation is already in progress."""

    code = RESULT_ERR_ACTION_IN_PROGRESS


class NotSupportedError(RemoteCallError):
    """Raised when an operation is not supported."""

    code = RESULT_ERR_NOT_SUPPORTED


class NoReplyError(RemoteCallError):
    """Raised when the daemon does not answer within the call timeout."""

    code = RESULT_ERR_NO_REPLY


class ServiceUnavailableError(RemoteCallError):
    """Raised when the BlueZ daemon is not reachable on the bus."""

    code = RESULT_ERR_UNKNOWN_SERVCE


class ParseError(BlueproxyError, ValueError):
    """Raised when a returned value cannot be decoded into its target type."""

    code = RESULT_ERR_PARSE

    def __init__(self, value: Any, target: str, context: Optional[str] = None):
        message = f"Cannot parse {value!r} as {target}"
        if context:
            message += f" ({context})"
        super().__init__(message)
        self.value = value
        self.target = target
        self.context = context


class ConfigurationError(BlueproxyError):
    """Raised when a configuration file or variable is malformed."""

    code = RESULT_ERR_CONFIG


# Map D-Bus error names to exception classes
DBUS_ERROR_MAP = {
    "org.freedesktop.DBus.Error.UnknownObject": UnknownObjectError,
    "org.freedesktop.DBus.Error.UnknownInterface": UnknownObjectError,
    "org.freedesktop.DBus.Error.UnknownMethod": UnknownObjectError,
    "org.freedesktop.DBus.Error.UnknownProperty": UnknownObjectError,
    "org.bluez.Error.DoesNotExist": UnknownObjectError,
    "org.freedesktop.DBus.Error.InvalidArgs": InvalidArgumentError,
    "org.bluez.Error.InvalidArguments": InvalidArgumentError,
    "org.freedesktop.DBus.Error.AccessDenied": NotPermittedError,
    "org.bluez.Error.NotPermitted": NotPermittedError,
    "org.bluez.Error.NotAuthorized": NotPermittedError,
    "org.bluez.Error.NotReady": NotReadyError,
    "org.bluez.Error.Rejected": NotReadyError,
    "org.bluez.Error.InProgress": InProgressError,
    "org.bluez.Error.NotSupported": NotSupportedError,
    "org.freedesktop.DBus.Error.NotSupported": NotSupportedError,
    "org.freedesktop.DBus.Error.NoReply": NoReplyError,
    "org.freedesktop.DBus.Error.Timeout": NoReplyError,
    "org.freedesktop.DBus.Error.TimedOut": NoReplyError,
    "org.freedesktop.DBus.Error.ServiceUnknown": ServiceUnavailableError,
    "org.freedesktop.DBus.Error.NameHasNoOwner": ServiceUnavailableError,
    "org.freedesktop.DBus.Error.Disconnected": ServiceUnavailableError,
}


def map_dbus_error(
    exc: dbus.exceptions.DBusException,
    operation: str = "D-Bus operation",
    path: Optional[str] = None,
) -> RemoteCallError:
    """Return a RemoteCallError instance for the given D-Bus exception.

    Parameters
    ----------
    exc : dbus.exceptions.DBusException
        The D-Bus exception to map
    operation : str
        What was being attempted, e.g. ``Get Powered``
    path : str, optional
        Object path the call targeted

    Returns
    -------
    RemoteCallError
        The subclass registered for the D-Bus error name, or RemoteCallError
    """
    name = exc.get_dbus_name()
    msg = exc.get_dbus_message() or ""

    cls = DBUS_ERROR_MAP.get(name, RemoteCallError)
    return cls(operation, path, name, msg or None)


__all__ = [
    "BlueproxyError",
    "RemoteCallError",
    "UnknownObjectError",
    "InvalidArgumentError",
    "NotPermittedError",
    "NotReadyError",
    "InProgressError",
    "NotSupportedError",
    "NoReplyError",
    "ServiceUnavailableError",
    "ParseError",
    "ConfigurationError",
    "DBUS_ERROR_MAP",
    "map_dbus_error",
]
