#!/usr/bin/env python3
"""Register dump tool for pysolis.

Maintenance tool for mapping unknown registers.  Scans a range of input
registers and prints, for every address, the single word at that address
and the 32-bit value of the pair starting there.  Addresses that belong to
the Solis register table are annotated with the decoded value.

This is not part of the bridge: nothing is published.

Usage:
    pysolis-register-dump
    pysolis-register-dump --start 3000 --end 3050
    pysolis-register-dump --serial-port /dev/ttyUSB1 --help
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Callable

from pysolis.decoding import combine_words, decode
from pysolis.exceptions import SolisError
from pysolis.publishing.topics import format_value
from pysolis.registers import BY_ADDRESS
from pysolis.transports import ModbusSerialTransport, RegisterReader
from pysolis.transports.exceptions import TransportTimeoutError

DEFAULT_START = 3000
DEFAULT_END = 3099


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="pysolis-register-dump",
        description="Dump raw Solis input registers as u16 and u32 values.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pysolis-register-dump
      Scan input registers 3000-3098 on /dev/ttyUSB0

  pysolis-register-dump --start 3229 --end 3240
      Scan a narrower range
""",
    )
    parser.add_argument(
        "--serial-port",
        default="/dev/ttyUSB0",
        help="Serial port of the RS485 adapter (default: %(default)s)",
    )
    parser.add_argument(
        "--baudrate",
        type=int,
        default=9600,
        help="Serial baud rate (default: %(default)s)",
    )
    parser.add_argument(
        "--unit-id",
        type=int,
        default=1,
        help="Modbus unit ID (default: %(default)s)",
    )
    parser.add_argument(
        "--start",
        type=int,
        default=DEFAULT_START,
        help="First address to scan (default: %(default)s)",
    )
    parser.add_argument(
        "--end",
        type=int,
        default=DEFAULT_END,
        help="Address to stop before (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=5.0,
        help="Timeout per read in seconds (default: %(default)s)",
    )
    return parser


def format_u16_line(address: int, words: list[int]) -> str:
    """Format the single-word read at *address*."""
    line = f"register {address} (u16): {words}"
    known = BY_ADDRESS.get(address)
    if known is not None and known.width == 16:
        line += f" - {known.name} = {format_value(decode(known, words))} {known.unit}"
    return line


def format_u32_line(address: int, words: list[int]) -> str:
    """Format the register-pair read starting at *address*."""
    line = f"register {address} (u32): {words} {combine_words(words)}"
    known = BY_ADDRESS.get(address)
    if known is not None and known.width == 32:
        line += f" - {known.name} = {format_value(decode(known, words))} {known.unit}"
    return line


async def _read(transport: RegisterReader, address: int, count: int, timeout: float) -> list[int]:
    try:
        return await asyncio.wait_for(
            transport.read_input_registers(address, count),
            timeout=timeout,
        )
    except TimeoutError as err:
        raise TransportTimeoutError(f"Timeout reading input registers at {address}") from err


async def dump_registers(
    transport: RegisterReader,
    start: int,
    end: int,
    *,
    timeout: float = 5.0,
    out: Callable[[str], None] = print,
) -> int:
    """Print u16 and u32 views of every address in ``range(start, end)``.

    Stops at the first failed read.

    Returns:
        Number of addresses dumped.
    """
    dumped = 0
    for address in range(start, end):
        words = await _read(transport, address, 1, timeout)
        out(format_u16_line(address, words))

        words = await _read(transport, address, 2, timeout)
        out(format_u32_line(address, words))
        dumped += 1
    return dumped


async def run_dump(args: argparse.Namespace) -> int:
    """Connect and dump the requested range."""
    transport = ModbusSerialTransport(
        port=args.serial_port,
        baudrate=args.baudrate,
        unit_id=args.unit_id,
        timeout=args.timeout,
    )

    try:
        async with transport:
            dumped = await dump_registers(transport, args.start, args.end, timeout=args.timeout)
    except SolisError as err:
        print(f"  ✗ Dump failed: {err}", file=sys.stderr)
        return 1

    print(f"\n  ✓ Dumped {dumped} register(s)")
    return 0


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    # The u32 read at end - 1 touches end as well
    if not 0 <= args.start < args.end <= 0xFFFF:
        parser.error("--start and --end must satisfy 0 <= start < end <= 65535")

    return asyncio.run(run_dump(args))


if __name__ == "__main__":
    sys.exit(main())
