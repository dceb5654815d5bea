"""Register-read capability consumed by the poller.

Any object with an async ``read_input_registers(address, count)`` method
can feed the poller; ``ModbusSerialTransport`` is the production one and
the tests use in-memory fakes.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RegisterReader(Protocol):
    """Reads consecutive 16-bit input registers from a device."""

    async def read_input_registers(self, address: int, count: int) -> list[int]:
        """Read *count* words starting at *address*.

        Raises:
            TransportError: On timeout, disconnection or malformed response
        """
        ...
