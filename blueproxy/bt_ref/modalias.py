#!/usr/bin/python3
"""Modalias parsing utilities for blueproxy.

BlueZ exposes the local Device ID information of an adapter in the modalias
format used by the kernel and udev, for example ``usb:v1D6Bp0246d053F``.
The parser here turns that string into a :class:`Modalias` record.

For more information on modalias format, see:
https://wiki.archlinux.org/title/Modalias
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from blueproxy.core.errors import ParseError

__all__ = ["Modalias", "get_vendor_name"]

_MODALIAS_RX = re.compile(
    r"(?P<source>[A-Za-z0-9_-]+):"
    r"v(?P<vendor>[0-9A-Fa-f]{4})"
    r"p(?P<product>[0-9A-Fa-f]{4})"
    r"d(?P<version>[0-9A-Fa-f]{4})"
)

# Minimal vendor list, keyed by lower-case hex id
_VENDORS = {
    "05ac": "Apple, Inc.",
    "1d6b": "Linux Foundation",
    "8086": "Intel Corporation",
    "1a86": "QinHeng Electronics",
    "0403": "Future Technology Devices International, Ltd",
}


def get_vendor_name(vendor_id: int) -> str:
    """Vendor name lookup for a USB vendor id."""
    key = f"{vendor_id:04x}"
    return _VENDORS.get(key, f"Unknown (0x{key})")


@dataclass(frozen=True)
class Modalias:
    """Device identification record: bus type plus vendor/product/version."""

    source: str
    vendor: int
    product: int
    version: int

    @classmethod
    def parse(cls, text: str) -> "Modalias":
        """Parse ``<source>:v<VVVV>p<PPPP>d<DDDD>``.

        Raises
        ------
        ParseError
            If the source or any of the v/p/d segments is missing or malformed.
        """
        match = _MODALIAS_RX.fullmatch(text) if isinstance(text, str) else None
        if not match:
            raise ParseError(text, "Modalias")
        return cls(
            source=match.group("source"),
            vendor=int(match.group("vendor"), 16),
            product=int(match.group("product"), 16),
            version=int(match.group("version"), 16),
        )

    # ``bus`` is the udev name for the source field
    @property
    def bus(self) -> str:
        return self.source

    def vendor_name(self) -> str:
        return get_vendor_name(self.vendor)

    def __str__(self) -> str:
        return (
            f"{self.source}:v{self.vendor:04X}p{self.product:04X}d{self.version:04X}"
        )
