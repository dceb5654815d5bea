"""Tests for the Solis register definitions and register table."""

from __future__ import annotations

import pytest

from pysolis.exceptions import ConfigError
from pysolis.registers import (
    BY_ADDRESS,
    BY_NAME,
    SOLIS_INPUT_REGISTERS,
    SOLIS_REGISTER_TABLE,
    RegisterDefinition,
    RegisterTable,
)


class TestRegisterDefinition:
    """Tests for RegisterDefinition construction and validation."""

    def test_default_values(self) -> None:
        """Test a definition with only the required fields."""
        reg = RegisterDefinition(name="AC voltage", unit="V", address=3035)

        assert reg.width == 16
        assert reg.scale == 0
        assert reg.word_count == 1
        assert reg.description == ""

    def test_32bit_word_count(self) -> None:
        """Test that a 32-bit register spans two words."""
        reg = RegisterDefinition(name="AC power", unit="W", address=3004, width=32)

        assert reg.word_count == 2

    def test_frozen(self) -> None:
        """Test that RegisterDefinition is immutable."""
        reg = RegisterDefinition(name="AC voltage", unit="V", address=3035)

        with pytest.raises(AttributeError):
            reg.address = 3036  # type: ignore[misc]

    @pytest.mark.parametrize("width", [0, 8, 24, 48, 64, 16.0, "16", True])
    def test_unsupported_width_rejected(self, width: int) -> None:
        """Test that widths other than 16 and 32 fail at construction."""
        with pytest.raises(ConfigError, match="unsupported width"):
            RegisterDefinition(name="Bad", unit="V", address=3000, width=width)

    @pytest.mark.parametrize("scale", [-1, 1.5, True, "1"])
    def test_invalid_scale_rejected(self, scale: object) -> None:
        """Test that the scale must be a non-negative integer."""
        with pytest.raises(ConfigError, match="scale"):
            RegisterDefinition(
                name="Bad",
                unit="V",
                address=3000,
                scale=scale,  # type: ignore[arg-type]
            )

    @pytest.mark.parametrize("address", ["3000", 3000.0, True])
    def test_non_integer_address_rejected(self, address: object) -> None:
        """Test that the address must be an integer."""
        with pytest.raises(ConfigError, match="address must be an integer"):
            RegisterDefinition(
                name="Bad",
                unit="V",
                address=address,  # type: ignore[arg-type]
            )

    def test_empty_name_rejected(self) -> None:
        """Test that a register needs a name."""
        with pytest.raises(ConfigError, match="name"):
            RegisterDefinition(name="", unit="V", address=3000)

    @pytest.mark.parametrize(
        ("address", "width"),
        [(-1, 16), (0x10000, 16), (0xFFFF, 32)],
    )
    def test_address_out_of_range_rejected(self, address: int, width: int) -> None:
        """Test that every word of the register must be addressable."""
        with pytest.raises(ConfigError, match="out of range"):
            RegisterDefinition(name="Bad", unit="V", address=address, width=width)

    def test_highest_addresses_accepted(self) -> None:
        """Test the upper address bound for both widths."""
        assert RegisterDefinition(name="A", unit="", address=0xFFFF).address == 0xFFFF
        assert RegisterDefinition(name="B", unit="", address=0xFFFE, width=32).address == 0xFFFE


class TestRegisterTable:
    """Tests for RegisterTable."""

    def test_preserves_order(self) -> None:
        """Test that iteration follows construction order."""
        regs = [
            RegisterDefinition(name="B", unit="V", address=2),
            RegisterDefinition(name="A", unit="V", address=1),
        ]
        table = RegisterTable(regs)

        assert [r.name for r in table] == ["B", "A"]
        assert len(table) == 2
        assert table[0].name == "B"
        assert table[-1].name == "A"

    def test_duplicate_name_rejected(self) -> None:
        """Test that two registers cannot share a name (topics would collide)."""
        with pytest.raises(ConfigError, match="Duplicate register name"):
            RegisterTable(
                [
                    RegisterDefinition(name="AC power", unit="W", address=1),
                    RegisterDefinition(name="AC power", unit="W", address=2),
                ]
            )

    @pytest.mark.parametrize("name", ["ac power", "AC_power", "Ac Power"])
    def test_colliding_topic_rejected(self, name: str) -> None:
        """Test that names differing only in case or spacing cannot share a topic."""
        with pytest.raises(ConfigError, match="same topic 'ac_power_w'"):
            RegisterTable(
                [
                    RegisterDefinition(name="AC power", unit="W", address=3004, width=32),
                    RegisterDefinition(name=name, unit="W", address=3006),
                ]
            )

    def test_same_name_different_unit_topics_allowed(self) -> None:
        """Test that the unit keeps otherwise similar topics apart."""
        table = RegisterTable(
            [
                RegisterDefinition(name="DC1", unit="V", address=3021),
                RegisterDefinition(name="dc1", unit="A", address=3022),
            ]
        )

        assert len(table) == 2

    def test_duplicate_address_rejected(self) -> None:
        """Test that two registers cannot start at the same address."""
        with pytest.raises(ConfigError, match="share address 3014"):
            RegisterTable(
                [
                    RegisterDefinition(name="kWh today", unit="kWh", address=3014),
                    RegisterDefinition(name="kWh today again", unit="kWh", address=3014),
                ]
            )

    def test_overlapping_ranges_allowed(self) -> None:
        """Test that a 32-bit register may overlap the next address."""
        table = RegisterTable(
            [
                RegisterDefinition(name="Pair", unit="", address=3021, width=32),
                RegisterDefinition(name="Single", unit="", address=3022),
            ]
        )

        assert len(table) == 2

    def test_by_name(self) -> None:
        """Test lookup by name."""
        reg = RegisterDefinition(name="AC power", unit="W", address=3004, width=32)
        table = RegisterTable([reg])

        assert table.by_name("AC power") is reg
        with pytest.raises(KeyError):
            table.by_name("missing")

    def test_empty_table(self) -> None:
        """Test that an empty table is valid."""
        assert len(RegisterTable([])) == 0


class TestSolisInputRegisters:
    """Tests for the default Solis register map."""

    def test_table_order(self) -> None:
        """Test that the default table keeps its poll order."""
        assert [r.name for r in SOLIS_REGISTER_TABLE] == [
            "Total power generation",
            "kWh today",
            "kWh yesterday",
            "kWh this month",
            "kWh last month",
            "AC power",
            "DC1 voltage",
            "DC1 current",
            "DC2 voltage",
            "DC2 current",
            "AC voltage",
            "Temperature",
            "AC frequency",
        ]

    def test_energy_counters(self) -> None:
        """Test the energy counter layout."""
        total = BY_NAME["Total power generation"]
        assert (total.address, total.width, total.scale) == (3008, 32, 0)

        today = BY_NAME["kWh today"]
        assert (today.address, today.width, today.scale) == (3014, 16, 1)

    def test_frequency_has_two_decimals(self) -> None:
        """Test that grid frequency is reported in hundredths of a hertz."""
        assert BY_ADDRESS[3042].name == "AC frequency"
        assert BY_ADDRESS[3042].scale == 2

    def test_temperature_unit(self) -> None:
        """Test that temperature keeps its degree sign in the unit."""
        assert BY_NAME["Temperature"].unit == "°C"

    def test_lookup_indexes_cover_table(self) -> None:
        """Test that the indexes contain every register."""
        assert len(BY_NAME) == len(SOLIS_INPUT_REGISTERS)
        assert len(BY_ADDRESS) == len(SOLIS_INPUT_REGISTERS)
