"""MQTT topic and payload formatting.

Topic names are consumed by dashboards and recorders downstream, so the
format here is a compatibility contract:

    meters/<device>/<name>_<unit>     one per register
    meters/<device>/online            Unix time of the last completed pass
"""

from __future__ import annotations

DEFAULT_PREFIX = "meters"
DEFAULT_DEVICE_ID = "solis"
LIVENESS_SUFFIX = "online"


def topic_segment(name: str, unit: str) -> str:
    """Build the ``<name>_<unit>`` part of a reading topic.

    The name is lowercased with spaces replaced by underscores; the unit is
    lowercased with degree signs removed.
    """
    name_part = name.lower().replace(" ", "_")
    unit_part = unit.lower().replace("°", "")
    return f"{name_part}_{unit_part}"


def derive_topic(
    name: str,
    unit: str,
    device_id: str = DEFAULT_DEVICE_ID,
    prefix: str = DEFAULT_PREFIX,
) -> str:
    """Return the topic a reading named *name* in *unit* is published to.

    Example:
        >>> derive_topic("kWh today", "kWh")
        'meters/solis/kwh_today_kwh'
        >>> derive_topic("Temperature", "°C")
        'meters/solis/temperature_c'
    """
    return f"{prefix}/{device_id}/{topic_segment(name, unit)}"


def liveness_topic(device_id: str = DEFAULT_DEVICE_ID, prefix: str = DEFAULT_PREFIX) -> str:
    """Return the topic the end-of-pass timestamp is published to."""
    return f"{prefix}/{device_id}/{LIVENESS_SUFFIX}"


def format_value(value: float) -> str:
    """Format a decoded value as an MQTT payload.

    Integral values are written without a fractional part ("26368"),
    everything else with the shortest round-tripping repr ("37.3").
    """
    if value.is_integer():
        return str(int(value))
    return repr(value)
