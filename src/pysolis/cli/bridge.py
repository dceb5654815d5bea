#!/usr/bin/env python3
"""Solis Modbus-to-MQTT bridge.

Reads every register in the Solis input register table once, publishes the
decoded values to MQTT and finishes with a liveness timestamp.  Run it from
cron or a systemd timer; a failed pass exits non-zero and the next run
starts fresh.

Usage:
    pysolis-bridge
    pysolis-bridge --serial-port /dev/ttyUSB1 --mqtt-host broker.lan
    pysolis-bridge --help

Defaults can be supplied through the environment (or a ``.env`` file in the
working directory): SOLIS_SERIAL_PORT, SOLIS_BAUDRATE, SOLIS_UNIT_ID,
SOLIS_DEVICE_ID, MQTT_HOST, MQTT_PORT, MQTT_CLIENT_ID.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from aiomqtt import Client, MqttError
from dotenv import load_dotenv

from pysolis import __version__
from pysolis.config import BridgeSettings
from pysolis.exceptions import ConfigError, SolisError
from pysolis.poller import Poller
from pysolis.publishing import ReadingPublisher, run_notification_loop
from pysolis.registers import SOLIS_REGISTER_TABLE, RegisterTable
from pysolis.shutdown import Shutdown
from pysolis.transports import ModbusSerialTransport

_LOGGER = logging.getLogger(__name__)

_DEFAULTS = BridgeSettings()


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="pysolis-bridge",
        description="Poll a Solis inverter over Modbus RTU and publish readings to MQTT.",
    )

    # Serial options
    serial_group = parser.add_argument_group("Serial Options")
    serial_group.add_argument(
        "--serial-port",
        default=os.getenv("SOLIS_SERIAL_PORT", _DEFAULTS.serial_port),
        help="Serial port of the RS485 adapter (default: %(default)s)",
    )
    serial_group.add_argument(
        "--baudrate",
        type=int,
        default=int(os.getenv("SOLIS_BAUDRATE", str(_DEFAULTS.baudrate))),
        help="Serial baud rate (default: %(default)s)",
    )
    serial_group.add_argument(
        "--unit-id",
        type=int,
        default=int(os.getenv("SOLIS_UNIT_ID", str(_DEFAULTS.unit_id))),
        help="Modbus unit ID of the inverter (default: %(default)s)",
    )
    serial_group.add_argument(
        "--read-timeout",
        type=float,
        default=_DEFAULTS.read_timeout,
        help="Timeout per register read in seconds (default: %(default)s)",
    )

    # MQTT options
    mqtt_group = parser.add_argument_group("MQTT Options")
    mqtt_group.add_argument(
        "--mqtt-host",
        default=os.getenv("MQTT_HOST", _DEFAULTS.mqtt_host),
        help="MQTT broker hostname (default: %(default)s)",
    )
    mqtt_group.add_argument(
        "--mqtt-port",
        type=int,
        default=int(os.getenv("MQTT_PORT", str(_DEFAULTS.mqtt_port))),
        help="MQTT broker port (default: %(default)s)",
    )
    mqtt_group.add_argument(
        "--mqtt-client-id",
        default=os.getenv("MQTT_CLIENT_ID", _DEFAULTS.mqtt_client_id),
        help="MQTT client identifier (default: %(default)s)",
    )
    mqtt_group.add_argument(
        "--device-id",
        default=os.getenv("SOLIS_DEVICE_ID", _DEFAULTS.device_id),
        help="Device name used in topics, meters/<device>/... (default: %(default)s)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def settings_from_args(args: argparse.Namespace) -> BridgeSettings:
    """Build validated settings from parsed arguments.

    Raises:
        ConfigError: If the resulting settings are invalid
    """
    settings = BridgeSettings(
        serial_port=args.serial_port,
        baudrate=args.baudrate,
        unit_id=args.unit_id,
        read_timeout=args.read_timeout,
        mqtt_host=args.mqtt_host,
        mqtt_port=args.mqtt_port,
        mqtt_client_id=args.mqtt_client_id,
        device_id=args.device_id,
    )
    settings.validate()
    return settings


async def run_bridge(
    settings: BridgeSettings,
    registers: RegisterTable = SOLIS_REGISTER_TABLE,
) -> int:
    """Connect to the inverter and the broker, then run one poll pass.

    Returns:
        Process exit status: 0 when the pass completed, 1 otherwise.
    """
    transport = ModbusSerialTransport(
        port=settings.serial_port,
        baudrate=settings.baudrate,
        bytesize=settings.bytesize,
        parity=settings.parity,
        stopbits=settings.stopbits,
        unit_id=settings.unit_id,
        timeout=settings.read_timeout,
    )
    shutdown = Shutdown()

    try:
        async with (
            transport,
            Client(
                settings.mqtt_host,
                port=settings.mqtt_port,
                identifier=settings.mqtt_client_id,
                keepalive=settings.mqtt_keepalive,
            ) as client,
        ):
            _LOGGER.info("Connected to MQTT broker %s:%d", settings.mqtt_host, settings.mqtt_port)
            notifications = asyncio.create_task(run_notification_loop(client, shutdown))

            try:
                poller = Poller(
                    transport,
                    ReadingPublisher(
                        client,
                        device_id=settings.device_id,
                        prefix=settings.topic_prefix,
                    ),
                    registers,
                    read_timeout=settings.read_timeout,
                )
                _LOGGER.info("Collecting data")
                messages = await poller.run_pass()
            finally:
                shutdown.trigger()
                await notifications

    except MqttError as err:
        _LOGGER.error("MQTT connection to %s failed: %s", settings.mqtt_host, err)
        return 1
    except SolisError as err:
        _LOGGER.error("Poll pass failed: %s", err)
        return 1

    _LOGGER.info("Published %d message(s)", len(messages))
    return 0


def main() -> int:
    """Main entry point."""
    load_dotenv()
    parser = create_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = settings_from_args(args)
    except ConfigError as err:
        _LOGGER.error("Invalid configuration: %s", err)
        return 1

    return asyncio.run(run_bridge(settings))


if __name__ == "__main__":
    sys.exit(main())
