"""Background task that drains broker notifications.

The MQTT client queues every incoming message; this task consumes the queue
so it never backs up, and logs what arrives.  It shares nothing with the
poller except the client handle, and stops once the shutdown signal is
raised.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any, Protocol

from aiomqtt import MqttError

if TYPE_CHECKING:
    from pysolis.shutdown import Shutdown

_LOGGER = logging.getLogger(__name__)


class NotificationSource(Protocol):
    """Anything exposing an async iterator of incoming messages."""

    @property
    def messages(self) -> AsyncIterator[Any]: ...


async def run_notification_loop(
    client: NotificationSource,
    shutdown: Shutdown,
    *,
    interval: float = 1.0,
) -> int:
    """Drain ``client.messages`` until *shutdown* is triggered.

    Args:
        client: Connected MQTT client
        shutdown: Signal checked between waits
        interval: Longest time to wait for a message before re-checking
            the shutdown signal, in seconds

    Returns:
        Number of notifications drained.
    """
    messages = aiter(client.messages)
    drained = 0

    while not shutdown.is_shutdown():
        try:
            message = await asyncio.wait_for(anext(messages), timeout=interval)
        except TimeoutError:
            continue
        except StopAsyncIteration:
            _LOGGER.debug("MQTT notification stream ended")
            break
        except MqttError as err:
            _LOGGER.warning("MQTT notification stream failed: %s", err)
            break

        drained += 1
        _LOGGER.debug(
            "MQTT = %s %r",
            getattr(message, "topic", message),
            getattr(message, "payload", None),
        )

    return drained
