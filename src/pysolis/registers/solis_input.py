"""Solis inverter input register map.

Register addresses, widths and decimal places were confirmed against a
live Solis 1500 single-phase inverter by dumping input registers 3000-3098
(see ``pysolis-register-dump``).

Each RegisterDefinition carries everything needed to locate and interpret
one quantity:
  register address → width → decimal places → name/unit → MQTT topic

32-bit quantities are stored high word first, unlike the little-endian
pairs used by some other inverter brands.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import overload

from pysolis.exceptions import ConfigError
from pysolis.publishing.topics import topic_segment

SUPPORTED_WIDTHS: frozenset[int] = frozenset({16, 32})
MAX_ADDRESS = 0xFFFF


@dataclass(frozen=True)
class RegisterDefinition:
    """Single register definition: one reading in the register map.

    Attributes:
        name: Human-readable name, unique within a table.  The MQTT topic
            is derived from it, so once published it MUST NOT change.
        unit: Engineering unit string ("kWh", "W", "V", "A", "°C", "Hz").
        address: Modbus input register address (function code 0x04) of the
            first word.
        width: 16 (single register) or 32 (register pair, high word first).
        scale: Number of implied decimal places; the raw integer is
            divided by ``10 ** scale``.
        description: Notes from the register survey.

    Raises:
        ConfigError: If width, scale, address or name is invalid.
    """

    name: str
    unit: str
    address: int
    width: int = 16
    scale: int = 0
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigError("Register name must not be empty")
        if (
            isinstance(self.width, bool)
            or not isinstance(self.width, int)
            or self.width not in SUPPORTED_WIDTHS
        ):
            raise ConfigError(
                f"Register '{self.name}' has unsupported width {self.width} "
                f"(expected one of {sorted(SUPPORTED_WIDTHS)})"
            )
        if isinstance(self.scale, bool) or not isinstance(self.scale, int) or self.scale < 0:
            raise ConfigError(
                f"Register '{self.name}' scale must be a non-negative integer, got {self.scale!r}"
            )
        if isinstance(self.address, bool) or not isinstance(self.address, int):
            raise ConfigError(
                f"Register '{self.name}' address must be an integer, got {self.address!r}"
            )
        if not 0 <= self.address <= MAX_ADDRESS - (self.word_count - 1):
            raise ConfigError(f"Register '{self.name}' address {self.address} is out of range")

    @property
    def word_count(self) -> int:
        """Number of consecutive 16-bit words to read."""
        return self.width // 16


class RegisterTable(Sequence[RegisterDefinition]):
    """Ordered, read-only collection of register definitions.

    Order is the poll and publish order.  Names must be unique, and so must
    the MQTT topics derived from name and unit (names differing only in
    case or spacing collide).  Start addresses must be unique too.
    Overlapping address ranges are allowed.
    """

    def __init__(self, registers: Iterable[RegisterDefinition]) -> None:
        self._registers: tuple[RegisterDefinition, ...] = tuple(registers)
        self._by_name: dict[str, RegisterDefinition] = {}
        seen_addresses: dict[int, str] = {}
        seen_topics: dict[str, str] = {}

        for reg in self._registers:
            if reg.name in self._by_name:
                raise ConfigError(f"Duplicate register name: '{reg.name}'")
            segment = topic_segment(reg.name, reg.unit)
            if segment in seen_topics:
                raise ConfigError(
                    f"Registers '{seen_topics[segment]}' and '{reg.name}' "
                    f"publish to the same topic '{segment}'"
                )
            if reg.address in seen_addresses:
                raise ConfigError(
                    f"Registers '{seen_addresses[reg.address]}' and '{reg.name}' "
                    f"share address {reg.address}"
                )
            self._by_name[reg.name] = reg
            seen_addresses[reg.address] = reg.name
            seen_topics[segment] = reg.name

    @overload
    def __getitem__(self, index: int) -> RegisterDefinition: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[RegisterDefinition, ...]: ...

    def __getitem__(
        self, index: int | slice
    ) -> RegisterDefinition | tuple[RegisterDefinition, ...]:
        return self._registers[index]

    def __len__(self) -> int:
        return len(self._registers)

    def __iter__(self) -> Iterator[RegisterDefinition]:
        return iter(self._registers)

    def __repr__(self) -> str:
        return f"RegisterTable({[r.name for r in self._registers]!r})"

    def by_name(self, name: str) -> RegisterDefinition:
        """Return the register with the given name.

        Raises:
            KeyError: If no register has that name
        """
        return self._by_name[name]


# =============================================================================
# SOLIS INPUT REGISTERS (Function Code 0x04, Read-Only)
# =============================================================================

SOLIS_INPUT_REGISTERS: tuple[RegisterDefinition, ...] = (
    # =========================================================================
    # ENERGY COUNTERS (regs 3008-3015)
    # =========================================================================
    RegisterDefinition(
        name="Total power generation",
        unit="kWh",
        address=3008,
        width=32,
        description="Lifetime energy yield.",
    ),
    RegisterDefinition(
        name="kWh today",
        unit="kWh",
        address=3014,
        scale=1,
        description="Energy generated today.",
    ),
    RegisterDefinition(
        name="kWh yesterday",
        unit="kWh",
        address=3015,
        scale=1,
        description="Energy generated yesterday.",
    ),
    RegisterDefinition(
        name="kWh this month",
        unit="kWh",
        address=3010,
        width=32,
        description="Energy generated this calendar month.",
    ),
    RegisterDefinition(
        name="kWh last month",
        unit="kWh",
        address=3012,
        width=32,
        description="Energy generated last calendar month.",
    ),
    # =========================================================================
    # AC OUTPUT POWER (regs 3004-3005)
    # =========================================================================
    RegisterDefinition(
        name="AC power",
        unit="W",
        address=3004,
        width=32,
        description="Active AC output power.",
    ),
    # =========================================================================
    # PV INPUT (regs 3021-3024)
    # =========================================================================
    RegisterDefinition(
        name="DC1 voltage",
        unit="V",
        address=3021,
        scale=1,
        description="PV string 1 voltage.",
    ),
    RegisterDefinition(
        name="DC1 current",
        unit="A",
        address=3022,
        scale=1,
        description="PV string 1 current.",
    ),
    RegisterDefinition(
        name="DC2 voltage",
        unit="V",
        address=3023,
        scale=1,
        description="PV string 2 voltage.",
    ),
    RegisterDefinition(
        name="DC2 current",
        unit="A",
        address=3024,
        scale=1,
        description="PV string 2 current.",
    ),
    # =========================================================================
    # GRID SIDE (regs 3035, 3041-3042)
    # =========================================================================
    RegisterDefinition(
        name="AC voltage",
        unit="V",
        address=3035,
        scale=1,
        description="Grid voltage.",
    ),
    RegisterDefinition(
        name="Temperature",
        unit="°C",
        address=3041,
        scale=1,
        description="Inverter internal temperature.",
    ),
    RegisterDefinition(
        name="AC frequency",
        unit="Hz",
        address=3042,
        scale=2,
        description="Grid frequency.",
    ),
)


# =============================================================================
# LOOKUP INDEXES (built once at import time)
# =============================================================================

# Validates the default table at import time.
SOLIS_REGISTER_TABLE = RegisterTable(SOLIS_INPUT_REGISTERS)

# name → RegisterDefinition
BY_NAME: dict[str, RegisterDefinition] = {r.name: r for r in SOLIS_INPUT_REGISTERS}

# address → RegisterDefinition
BY_ADDRESS: dict[int, RegisterDefinition] = {r.address: r for r in SOLIS_INPUT_REGISTERS}
