"""One poll pass over a register table.

For each register, in table order, the poller reads its words through the
transport (bounded by a timeout), decodes them and publishes the value.
After the last register it publishes a liveness timestamp.

Any failure aborts the pass at once: readings already published stay
published, later registers are never read, and no liveness timestamp is
sent.  There are no retries; restarting is left to whatever supervises the
process.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

from pysolis.decoding import decode_reading
from pysolis.publishing.topics import format_value
from pysolis.transports.exceptions import TransportTimeoutError

if TYPE_CHECKING:
    from pysolis.publishing import PublishedMessage, ReadingPublisher
    from pysolis.registers import RegisterDefinition, RegisterTable
    from pysolis.transports import RegisterReader

_LOGGER = logging.getLogger(__name__)

DEFAULT_READ_TIMEOUT = 5.0


class PollState(str, Enum):
    """Progress of the current pass."""

    IDLE = "idle"
    READ_PENDING = "read_pending"
    LIVENESS_PUBLISH = "liveness_publish"
    DONE = "done"
    FAILED = "failed"


class Poller:
    """Reads, decodes and publishes every register in a table.

    Example:
        poller = Poller(transport, ReadingPublisher(client), SOLIS_REGISTER_TABLE)
        messages = await poller.run_pass()
    """

    def __init__(
        self,
        transport: RegisterReader,
        publisher: ReadingPublisher,
        registers: RegisterTable,
        *,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the poller.

        Args:
            transport: Register-read capability; owned by this poller
            publisher: Publisher adapter for decoded readings
            registers: Table to poll, in poll order
            read_timeout: Upper bound on each register read, in seconds
            clock: Source of the liveness timestamp (seconds since epoch)
        """
        self._transport = transport
        self._publisher = publisher
        self._registers = registers
        self._read_timeout = read_timeout
        self._clock = clock
        self._state = PollState.IDLE

    @property
    def state(self) -> PollState:
        """Get the state of the current (or last) pass."""
        return self._state

    @property
    def registers(self) -> RegisterTable:
        """Get the register table being polled."""
        return self._registers

    async def run_pass(self) -> list[PublishedMessage]:
        """Run one pass over the register table.

        Returns:
            Messages published during the pass, liveness last.

        Raises:
            TransportTimeoutError: If a read exceeds the timeout
            TransportError: If the transport reports a fault
            DecodeError: If a read returns the wrong number of words
            PublishError: If a publish fails
        """
        published: list[PublishedMessage] = []

        try:
            for register in self._registers:
                self._state = PollState.READ_PENDING
                raw = await self._read(register)

                reading = decode_reading(register, raw)
                _LOGGER.info("%s: %s %s", register.name, format_value(reading.value), register.unit)

                published.append(await self._publisher.publish_reading(reading))

            self._state = PollState.LIVENESS_PUBLISH
            published.append(await self._publisher.publish_liveness(int(self._clock())))
        except Exception as err:
            self._state = PollState.FAILED
            _LOGGER.error(
                "Poll pass aborted after %d message(s): %s",
                len(published),
                err,
            )
            raise

        self._state = PollState.DONE
        return published

    async def _read(self, register: RegisterDefinition) -> list[int]:
        """Read the words for *register* within the read timeout."""
        try:
            return await asyncio.wait_for(
                self._transport.read_input_registers(register.address, register.word_count),
                timeout=self._read_timeout,
            )
        except TimeoutError as err:
            raise TransportTimeoutError(
                f"Timeout after {self._read_timeout}s reading '{register.name}' "
                f"at {register.address}"
            ) from err
