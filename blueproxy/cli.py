"""
Command-line interface for blueproxy.
"""

import argparse
import asyncio
import sys

from . import __version__
from .bt_ref.address import Address, AddressType
from .core import log
from .core.config import load_settings
from .core.errors import BlueproxyError, ParseError, RemoteCallError
from .dbuslayer.session import Session

logger = log.get_logger(__name__)

_SWITCHES = {
    "power": "set_powered",
    "discoverable": "set_discoverable",
    "pairable": "set_pairable",
}

_TIMEOUTS = {
    "discoverable-timeout": "set_discoverable_timeout",
    "pairable-timeout": "set_pairable_timeout",
}


def _address(text):
    try:
        return Address.parse(text)
    except ParseError:
        raise argparse.ArgumentTypeError(f"invalid Bluetooth address: {text}")


def parse_args(args=None):
    parser = argparse.ArgumentParser(
        prog="blueproxy", description="Inspect and control a BlueZ adapter"
    )
    parser.add_argument("--version", action="version", version=f"blueproxy {__version__}")
    parser.add_argument("-a", "--adapter", help="Adapter name (default from config, hci0)")
    parser.add_argument("--timeout", type=float, help="D-Bus call timeout in seconds")
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    subparsers.add_parser("info", help="Show adapter properties")
    subparsers.add_parser("adapters", help="List adapters known to BlueZ")
    subparsers.add_parser("devices", help="List device addresses known on the adapter")

    for name in _SWITCHES:
        p = subparsers.add_parser(name, help=f"Switch {name} on or off")
        p.add_argument("state", choices=["on", "off"])

    for name in _TIMEOUTS:
        p = subparsers.add_parser(name, help=f"Set the {name.replace('-', ' ')} (0 = never)")
        p.add_argument("seconds", type=int)

    alias_parser = subparsers.add_parser("alias", help="Show or set the adapter alias")
    alias_parser.add_argument("value", nargs="?", help="New alias ('' resets to system name)")

    remove_parser = subparsers.add_parser("remove", help="Remove a device and its pairing")
    remove_parser.add_argument("address", type=_address)

    connect_parser = subparsers.add_parser("connect", help="Connect a device without discovery")
    connect_parser.add_argument("address", type=_address)
    connect_parser.add_argument(
        "--address-type", choices=[t.value for t in AddressType], default=None
    )

    return parser.parse_args(args)


async def _show_info(adapter):
    rows = [
        ("Name", adapter.name),
        ("Path", adapter.dbus_path),
        ("Address", await adapter.address()),
        ("AddressType", await adapter.address_type()),
        ("SystemName", await adapter.system_name()),
        ("Alias", await adapter.alias()),
        ("Class", f"0x{await adapter.device_class():06x}"),
        ("Powered", await adapter.is_powered()),
        ("Discoverable", await adapter.is_discoverable()),
        ("DiscoverableTimeout", await adapter.discoverable_timeout()),
        ("Pairable", await adapter.is_pairable()),
        ("PairableTimeout", await adapter.pairable_timeout()),
        ("Discovering", await adapter.is_discovering()),
    ]
    try:
        modalias = await adapter.modalias()
        rows.append(("Modalias", f"{modalias} ({modalias.vendor_name()})"))
    except RemoteCallError as e:
        logger.debug("No modalias: %s", e)
        rows.append(("Modalias", "n/a"))
    for key, value in rows:
        log.print_and_log(f"{key:<20} {value}")
    for uuid in await adapter.uuids():
        log.print_and_log(f"{'UUID':<20} {uuid}")


async def _run(args, session):
    if args.command == "adapters":
        for name in await session.adapter_names():
            log.print_and_log(name)
        return

    adapter = session.adapter(args.adapter)

    if args.command == "info":
        await _show_info(adapter)
    elif args.command == "devices":
        for address in await adapter.device_addresses():
            log.print_and_log(str(address))
    elif args.command in _SWITCHES:
        await getattr(adapter, _SWITCHES[args.command])(args.state == "on")
    elif args.command in _TIMEOUTS:
        await getattr(adapter, _TIMEOUTS[args.command])(args.seconds)
    elif args.command == "alias":
        if args.value is None:
            log.print_and_log(await adapter.alias())
        else:
            await adapter.set_alias(args.value)
    elif args.command == "remove":
        await adapter.remove_device(adapter.device_path(args.address))
    elif args.command == "connect":
        address_type = AddressType(args.address_type) if args.address_type else None
        log.print_and_log(await adapter.connect_device(args.address, address_type))


def main(argv=None, session=None):
    args = parse_args(argv)
    try:
        settings = load_settings(args.config)
        log.set_level("DEBUG" if args.verbose else settings.log_level)
        if session is None:
            session = Session(timeout=args.timeout, settings=settings)
        with session:
            asyncio.run(_run(args, session))
    except BlueproxyError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
