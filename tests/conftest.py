"""Pytest configuration and fixtures for pysolis tests."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from aiomqtt import MqttError

from pysolis.registers import RegisterDefinition, RegisterTable

# Liveness timestamp used by every fake clock
FIXED_NOW = 1_700_000_000.75


class FakeTransport:
    """In-memory register reader.

    ``responses`` maps a start address to either the list of words to
    return or an exception instance to raise.  An address mapped to
    ``HANG`` never answers.
    """

    HANG = object()

    def __init__(self, responses: dict[int, Any]) -> None:
        self.responses = responses
        self.reads: list[tuple[int, int]] = []

    async def read_input_registers(self, address: int, count: int) -> list[int]:
        self.reads.append((address, count))
        response = self.responses[address]
        if response is self.HANG:
            await asyncio.Event().wait()
        if isinstance(response, BaseException):
            raise response
        return list(response)


class FakeMqttClient:
    """Records publishes; optionally fails on the n-th one (1-based)."""

    def __init__(self, fail_on: int | None = None) -> None:
        self.published: list[tuple[str, Any, int, bool]] = []
        self.fail_on = fail_on

    async def publish(
        self,
        topic: str,
        payload: Any = None,
        qos: int = 0,
        retain: bool = False,
    ) -> None:
        if self.fail_on is not None and len(self.published) + 1 == self.fail_on:
            raise MqttError("broker went away")
        self.published.append((topic, payload, qos, retain))

    @property
    def topics(self) -> list[str]:
        return [entry[0] for entry in self.published]

    @property
    def payloads(self) -> list[Any]:
        return [entry[1] for entry in self.published]


@pytest.fixture
def five_registers() -> RegisterTable:
    """Small table with both widths and several scales."""
    return RegisterTable(
        [
            RegisterDefinition(name="Total power generation", unit="kWh", address=3008, width=32),
            RegisterDefinition(name="kWh today", unit="kWh", address=3014, scale=1),
            RegisterDefinition(name="AC power", unit="W", address=3004, width=32),
            RegisterDefinition(name="Temperature", unit="°C", address=3041, scale=1),
            RegisterDefinition(name="AC frequency", unit="Hz", address=3042, scale=2),
        ]
    )


@pytest.fixture
def five_responses() -> dict[int, Any]:
    """Raw words matching ``five_registers``, taken from a live dump."""
    return {
        3008: [0, 26368],
        3014: [373],
        3004: [0, 240],
        3041: [360],
        3042: [5000],
    }


@pytest.fixture
def mqtt_client() -> FakeMqttClient:
    """MQTT client that accepts every publish."""
    return FakeMqttClient()


@pytest.fixture
def fixed_clock() -> Any:
    """Clock returning FIXED_NOW."""
    return lambda: FIXED_NOW
