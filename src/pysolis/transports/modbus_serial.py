"""Modbus RTU serial transport implementation.

This module provides the ModbusSerialTransport class for direct local
communication with Solis inverters via Modbus RTU over USB-to-RS485 serial
adapters.

IMPORTANT: Single-Client Limitation
------------------------------------
Serial ports support only ONE concurrent connection.
Running multiple clients causes communication errors and data corruption.

Ensure only ONE bridge/script connects to each serial port at a time.

Example:
    async with ModbusSerialTransport(port="/dev/ttyUSB0") as transport:
        words = await transport.read_input_registers(3014, 1)
"""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import TYPE_CHECKING

from pymodbus.exceptions import ModbusIOException

from .exceptions import (
    TransportConnectionError,
    TransportReadError,
    TransportTimeoutError,
)

if TYPE_CHECKING:
    from pymodbus.client import AsyncModbusSerialClient

_LOGGER = logging.getLogger(__name__)

# Modbus FC 04 limit per request
MAX_READ_COUNT = 125


class ModbusSerialTransport:
    """Modbus RTU serial transport for local inverter communication.

    Reads input registers (function code 0x04) from a single unit on the
    bus.  There are no application-level retries: a failed read surfaces
    immediately so the caller can abort its pass.

    Example:
        transport = ModbusSerialTransport(
            port="/dev/ttyUSB0",
            baudrate=9600,
        )
        await transport.connect()

        words = await transport.read_input_registers(3008, 2)

    Note:
        Requires the `pymodbus` and `pyserial` packages to be installed.
    """

    transport_type: str = "modbus_serial"

    def __init__(
        self,
        port: str = "/dev/ttyUSB0",
        baudrate: int = 9600,
        bytesize: int = 8,
        parity: str = "N",
        stopbits: int = 1,
        unit_id: int = 1,
        timeout: float = 5.0,
        pymodbus_retries: int = 0,
    ) -> None:
        """Initialize Modbus serial transport.

        Args:
            port: Serial port path (e.g., /dev/ttyUSB0, COM3, /dev/tty.usbserial)
            baudrate: Serial baud rate (default 9600 for Solis inverters)
            bytesize: Data bits per byte (default 8)
            parity: Parity setting - 'N' (none), 'E' (even), 'O' (odd)
            stopbits: Number of stop bits (default 1)
            unit_id: Modbus unit/slave ID (default 1)
            timeout: Connection and operation timeout in seconds
            pymodbus_retries: Number of retries passed to pymodbus client
                (default 0)
        """
        self._port = port
        self._baudrate = baudrate
        self._bytesize = bytesize
        self._parity = parity
        self._stopbits = stopbits
        self._unit_id = unit_id
        self._timeout = timeout
        self._pymodbus_retries = pymodbus_retries
        self._client: AsyncModbusSerialClient | None = None
        self._connected = False
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def port(self) -> str:
        """Get the serial port path."""
        return self._port

    @property
    def baudrate(self) -> int:
        """Get the serial baud rate."""
        return self._baudrate

    @property
    def unit_id(self) -> int:
        """Get the Modbus unit/slave ID."""
        return self._unit_id

    @property
    def is_connected(self) -> bool:
        """Whether connect() succeeded and disconnect() has not been called."""
        return self._connected

    # ------------------------------------------------------------------
    # Connection management
    # ------------------------------------------------------------------

    async def connect(self) -> None:
        """Establish Modbus RTU serial connection.

        Raises:
            TransportConnectionError: If connection fails
        """
        try:
            from pymodbus.client import AsyncModbusSerialClient

            self._client = AsyncModbusSerialClient(
                port=self._port,
                baudrate=self._baudrate,
                bytesize=self._bytesize,
                parity=self._parity,
                stopbits=self._stopbits,
                timeout=self._timeout,
                retries=self._pymodbus_retries,
            )

            connected = await self._client.connect()
            if not connected:
                raise TransportConnectionError(f"Failed to connect to serial port {self._port}")

            self._connected = True
            _LOGGER.info(
                "Modbus serial transport connected to %s @ %d baud (unit %s)",
                self._port,
                self._baudrate,
                self._unit_id,
            )

        except PermissionError as err:
            _LOGGER.error(
                "Permission denied opening serial port %s: %s",
                self._port,
                err,
            )
            raise TransportConnectionError(
                f"Permission denied for {self._port}. "
                "On Linux, add user to 'dialout' group: "
                "sudo usermod -a -G dialout $USER"
            ) from err
        except (TimeoutError, OSError) as err:
            _LOGGER.error(
                "Failed to connect to serial port %s: %s",
                self._port,
                err,
            )
            raise TransportConnectionError(
                f"Failed to connect to {self._port}: {err}. "
                "Verify: (1) serial port exists, (2) device is connected, "
                "(3) correct permissions, (4) port is not in use by "
                "another application."
            ) from err

    async def disconnect(self) -> None:
        """Close Modbus serial connection."""
        if self._client:
            self._client.close()
            self._client = None

        self._connected = False
        _LOGGER.debug("Modbus serial transport disconnected from %s", self._port)

    async def __aenter__(self) -> ModbusSerialTransport:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.disconnect()

    def _ensure_connected(self) -> AsyncModbusSerialClient:
        if not self._connected or self._client is None:
            raise TransportConnectionError("Transport not connected")
        return self._client

    # ------------------------------------------------------------------
    # Register reads
    # ------------------------------------------------------------------

    async def read_input_registers(self, address: int, count: int) -> list[int]:
        """Read input registers (function code 0x04).

        Args:
            address: Starting register address
            count: Number of registers to read (1-125)

        Returns:
            List of register values, one per word

        Raises:
            ValueError: If count is outside 1-125
            TransportConnectionError: If not connected
            TransportReadError: If the device returns an error or no data
            TransportTimeoutError: If the device does not answer in time
        """
        if not 1 <= count <= MAX_READ_COUNT:
            raise ValueError(f"count must be between 1 and {MAX_READ_COUNT}, got {count}")

        client = self._ensure_connected()

        async with self._lock:
            try:
                result = await client.read_input_registers(
                    address=address,
                    count=count,
                    device_id=self._unit_id,
                )
            except ModbusIOException as err:
                # pymodbus reports a silent device as "No response received"
                message = str(err).lower()
                if "timeout" in message or "no response" in message:
                    raise TransportTimeoutError(
                        f"Timeout reading input registers at {address}"
                    ) from err
                raise TransportReadError(
                    f"Failed to read input registers at {address}: {err}"
                ) from err
            except TimeoutError as err:
                raise TransportTimeoutError(
                    f"Timeout reading input registers at {address}"
                ) from err
            except OSError as err:
                raise TransportReadError(
                    f"Failed to read input registers at {address}: {err}"
                ) from err

        if result.isError():
            raise TransportReadError(f"Modbus read error at address {address}: {result}")

        if not hasattr(result, "registers") or result.registers is None:
            raise TransportReadError(
                f"Invalid Modbus response at address {address}: no registers in response"
            )

        return list(result.registers)
