"""Python bridge from Solis inverter Modbus registers to MQTT.

Usage:
    One poll pass, wired by hand:
        from aiomqtt import Client

        from pysolis import Poller, ReadingPublisher, SOLIS_REGISTER_TABLE
        from pysolis.transports import ModbusSerialTransport

        async with (
            ModbusSerialTransport(port="/dev/ttyUSB0") as transport,
            Client("mqtt", identifier="solis-logger") as client,
        ):
            poller = Poller(transport, ReadingPublisher(client), SOLIS_REGISTER_TABLE)
            messages = await poller.run_pass()

    Or from the command line:
        pysolis-bridge --mqtt-host broker.lan
"""

from __future__ import annotations

from .config import BridgeSettings
from .decoding import DecodedReading, apply_scale, combine_words, decode
from .exceptions import (
    ConfigError,
    DecodeError,
    PublishError,
    SolisError,
    UnexpectedLengthError,
)
from .poller import Poller, PollState
from .publishing import PublishedMessage, ReadingPublisher, derive_topic
from .registers import SOLIS_REGISTER_TABLE, RegisterDefinition, RegisterTable
from .shutdown import Shutdown

__version__ = "0.1.0"
__all__ = [
    "BridgeSettings",
    "Poller",
    "PollState",
    "ReadingPublisher",
    "PublishedMessage",
    "Shutdown",
    "derive_topic",
    # Registers
    "RegisterDefinition",
    "RegisterTable",
    "SOLIS_REGISTER_TABLE",
    # Decoding
    "DecodedReading",
    "apply_scale",
    "combine_words",
    "decode",
    # Exceptions
    "SolisError",
    "ConfigError",
    "DecodeError",
    "UnexpectedLengthError",
    "PublishError",
]
