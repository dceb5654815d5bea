"""Bridge settings.

This module provides the BridgeSettings dataclass holding the fixed inputs
of one bridge run: how to reach the inverter on the serial line, how to
reach the MQTT broker, and how topics are named.  It supports validation
and serialization to/from dictionaries.

Example:
    settings = BridgeSettings(serial_port="/dev/ttyUSB1", mqtt_host="broker.lan")
    settings.validate()

    data = settings.to_dict()
    restored = BridgeSettings.from_dict(data)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

from pysolis.exceptions import ConfigError

VALID_PARITIES = ("N", "E", "O")


@dataclass(frozen=True)
class BridgeSettings:
    """Configuration for one bridge run.

    Attributes:
        serial_port: Serial device path of the RS485 adapter
        baudrate: Serial baud rate (9600 for Solis inverters)
        bytesize: Data bits per byte
        parity: 'N' (none), 'E' (even) or 'O' (odd)
        stopbits: Number of stop bits
        unit_id: Modbus unit/slave ID of the inverter
        read_timeout: Upper bound on each register read, in seconds
        mqtt_host: MQTT broker hostname
        mqtt_port: MQTT broker TCP port
        mqtt_client_id: MQTT client identifier
        mqtt_keepalive: MQTT keep-alive interval, in seconds
        device_id: Device identifier used in topics
        topic_prefix: First topic level
    """

    serial_port: str = "/dev/ttyUSB0"
    baudrate: int = 9600
    bytesize: int = 8
    parity: str = "N"
    stopbits: int = 1
    unit_id: int = 1
    read_timeout: float = 5.0
    mqtt_host: str = "mqtt"
    mqtt_port: int = 1883
    mqtt_client_id: str = "solis-logger"
    mqtt_keepalive: int = 5
    device_id: str = "solis"
    topic_prefix: str = "meters"

    def validate(self) -> None:
        """Validate settings.

        Raises:
            ConfigError: If a setting is out of range or empty
        """
        if not self.serial_port:
            raise ConfigError("serial_port must not be empty")
        if self.parity not in VALID_PARITIES:
            raise ConfigError(f"parity must be one of {VALID_PARITIES}, got {self.parity!r}")
        if self.stopbits not in (1, 2):
            raise ConfigError(f"stopbits must be 1 or 2, got {self.stopbits}")
        if not 1 <= self.unit_id <= 247:
            raise ConfigError(f"unit_id must be between 1 and 247, got {self.unit_id}")
        if self.read_timeout <= 0:
            raise ConfigError("read_timeout must be positive")
        if not self.mqtt_host:
            raise ConfigError("mqtt_host must not be empty")
        if not 0 < self.mqtt_port < 65536:
            raise ConfigError(f"mqtt_port must be between 1 and 65535, got {self.mqtt_port}")
        if self.mqtt_keepalive <= 0:
            raise ConfigError("mqtt_keepalive must be positive")

        # These become topic levels
        for name in ("device_id", "topic_prefix"):
            value = getattr(self, name)
            if not value or any(c in value for c in "/+#"):
                raise ConfigError(f"{name} must be a non-empty topic level, got {value!r}")

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to a dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BridgeSettings:
        """Create settings from a dictionary.

        Keys that are not settings are ignored; missing keys take their
        defaults.
        """
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})


__all__ = [
    "BridgeSettings",
]
