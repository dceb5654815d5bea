"""Transport layer for pysolis.

The poller only depends on the :class:`RegisterReader` protocol; the Modbus
RTU serial transport is the production implementation.

Usage:
    from pysolis.transports import ModbusSerialTransport

    async with ModbusSerialTransport(port="/dev/ttyUSB0") as transport:
        words = await transport.read_input_registers(3008, 2)
"""

from __future__ import annotations

from .exceptions import (
    TransportConnectionError,
    TransportError,
    TransportReadError,
    TransportTimeoutError,
)
from .modbus_serial import ModbusSerialTransport
from .protocol import RegisterReader

__all__ = [
    # Protocol
    "RegisterReader",
    # Transport implementations
    "ModbusSerialTransport",
    # Exceptions
    "TransportError",
    "TransportConnectionError",
    "TransportTimeoutError",
    "TransportReadError",
]
