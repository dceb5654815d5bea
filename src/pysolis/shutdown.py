"""Broadcast shutdown signal for background tasks."""

from __future__ import annotations

import asyncio


class Shutdown:
    """One-way flag that any number of tasks can observe.

    Once triggered it stays triggered; every current and future waiter is
    released.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def trigger(self) -> None:
        """Signal shutdown to all observers."""
        self._event.set()

    def is_shutdown(self) -> bool:
        """Whether shutdown has been signalled."""
        return self._event.is_set()

    async def wait(self) -> None:
        """Block until shutdown is signalled."""
        await self._event.wait()
