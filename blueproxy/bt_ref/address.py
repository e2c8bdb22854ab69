"""Bluetooth device addresses and address types.

BlueZ reports addresses as ``AA:BB:CC:DD:EE:FF`` strings and encodes them in
object paths as ``dev_AA_BB_CC_DD_EE_FF``.  Both forms are handled here.
"""

from __future__ import annotations

import enum
import re
from functools import total_ordering

from blueproxy.bt_ref.constants import DEVICE_PATH_PREFIX
from blueproxy.core.errors import ParseError

__all__ = ["Address", "AddressType"]

_ADDRESS_RX = re.compile(r"[0-9A-Fa-f]{2}(?::[0-9A-Fa-f]{2}){5}")


@total_ordering
class Address:
    """A 6-octet Bluetooth hardware address."""

    __slots__ = ("_octets",)

    def __init__(self, octets: bytes):
        octets = bytes(octets)
        if len(octets) != 6:
            raise ValueError(f"an address has 6 octets, got {len(octets)}")
        self._octets = octets

    @classmethod
    def parse(cls, text: str) -> "Address":
        """Parse ``AA:BB:CC:DD:EE:FF`` (either case)."""
        if not isinstance(text, str) or not _ADDRESS_RX.fullmatch(text):
            raise ParseError(text, "Address")
        return cls(bytes(int(part, 16) for part in text.split(":")))

    @classmethod
    def from_path_segment(cls, segment: str) -> "Address":
        """Parse the trailing segment of a device path (``AA_BB_CC_DD_EE_FF``).

        A leading ``dev_`` token is accepted and dropped.
        """
        if segment.startswith(DEVICE_PATH_PREFIX):
            segment = segment[len(DEVICE_PATH_PREFIX):]
        return cls.parse(segment.replace("_", ":"))

    @property
    def octets(self) -> bytes:
        return self._octets

    def path_segment(self) -> str:
        return DEVICE_PATH_PREFIX + str(self).replace(":", "_")

    def __str__(self) -> str:
        return ":".join(f"{b:02X}" for b in self._octets)

    def __repr__(self) -> str:
        return f"Address('{self}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._octets == other._octets

    def __lt__(self, other) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._octets < other._octets

    def __hash__(self) -> int:
        return hash(self._octets)


class AddressType(enum.Enum):
    """Bluetooth address type as reported by the ``AddressType`` property."""

    PUBLIC = "public"
    RANDOM = "random"

    @classmethod
    def parse(cls, text: str) -> "AddressType":
        try:
            return cls(text)
        except ValueError:
            raise ParseError(text, "AddressType") from None

    def __str__(self) -> str:
        return self.value
