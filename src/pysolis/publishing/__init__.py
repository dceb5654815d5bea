"""MQTT publishing for decoded readings.

Usage:
    from aiomqtt import Client
    from pysolis.publishing import ReadingPublisher

    async with Client("mqtt", identifier="solis-logger") as client:
        publisher = ReadingPublisher(client, device_id="solis")
        await publisher.publish_liveness(1700000000)
"""

from __future__ import annotations

from .notifications import run_notification_loop
from .publisher import AT_LEAST_ONCE, PublishClient, PublishedMessage, ReadingPublisher
from .topics import derive_topic, format_value, liveness_topic, topic_segment

__all__ = [
    "AT_LEAST_ONCE",
    "PublishClient",
    "PublishedMessage",
    "ReadingPublisher",
    "derive_topic",
    "format_value",
    "liveness_topic",
    "run_notification_loop",
    "topic_segment",
]
