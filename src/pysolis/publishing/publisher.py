"""Publish decoded readings to MQTT.

ReadingPublisher turns a DecodedReading (or the end-of-pass liveness
timestamp) into a topic and payload and submits it with QoS 1.  There is
no local buffering or retry queue: a failed publish raises PublishError
and the caller aborts its pass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from aiomqtt import MqttError

from pysolis.exceptions import PublishError

from .topics import (
    DEFAULT_DEVICE_ID,
    DEFAULT_PREFIX,
    derive_topic,
    format_value,
    liveness_topic,
)

if TYPE_CHECKING:
    from pysolis.decoding import DecodedReading

_LOGGER = logging.getLogger(__name__)

# MQTT QoS 1: delivered at least once, duplicates possible
AT_LEAST_ONCE = 1


class PublishClient(Protocol):
    """Publish capability; ``aiomqtt.Client`` satisfies it."""

    async def publish(
        self,
        topic: str,
        payload: Any = None,
        qos: int = 0,
        retain: bool = False,
    ) -> None: ...


@dataclass(frozen=True)
class PublishedMessage:
    """A topic/payload pair that was acknowledged by the broker."""

    topic: str
    payload: str


class ReadingPublisher:
    """Formats readings and forwards them through a publish client."""

    def __init__(
        self,
        client: PublishClient,
        *,
        device_id: str = DEFAULT_DEVICE_ID,
        prefix: str = DEFAULT_PREFIX,
    ) -> None:
        """Initialize the publisher.

        Args:
            client: Connected MQTT client (or any PublishClient)
            device_id: Device identifier used in every topic
            prefix: First topic level
        """
        self._client = client
        self._device_id = device_id
        self._prefix = prefix

    @property
    def device_id(self) -> str:
        """Get the device identifier used in topics."""
        return self._device_id

    def topic_for(self, name: str, unit: str) -> str:
        """Return the topic a reading with *name* and *unit* goes to."""
        return derive_topic(name, unit, self._device_id, self._prefix)

    async def publish(self, topic: str, payload: str) -> PublishedMessage:
        """Publish *payload* to *topic* with at-least-once delivery.

        Raises:
            PublishError: If the client fails to publish
        """
        try:
            await self._client.publish(topic, payload=payload, qos=AT_LEAST_ONCE, retain=False)
        except MqttError as err:
            _LOGGER.error("Failed to publish to %s: %s", topic, err)
            raise PublishError(f"Failed to publish to {topic}: {err}") from err

        _LOGGER.debug("Published %s = %s", topic, payload)
        return PublishedMessage(topic=topic, payload=payload)

    async def publish_reading(self, reading: DecodedReading) -> PublishedMessage:
        """Publish a decoded register value."""
        register = reading.register
        return await self.publish(
            self.topic_for(register.name, register.unit),
            format_value(reading.value),
        )

    async def publish_liveness(self, timestamp: int) -> PublishedMessage:
        """Publish the end-of-pass Unix timestamp."""
        return await self.publish(
            liveness_topic(self._device_id, self._prefix),
            str(timestamp),
        )
