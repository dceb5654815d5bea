"""Modbus register maps for Solis inverters.

This package is the single source of truth for register definitions.

- solis_input: Inverter input registers (function code 0x04, read-only)
"""

from pysolis.registers.solis_input import (
    BY_ADDRESS,
    BY_NAME,
    SOLIS_INPUT_REGISTERS,
    SOLIS_REGISTER_TABLE,
    SUPPORTED_WIDTHS,
    RegisterDefinition,
    RegisterTable,
)

__all__ = [
    "BY_ADDRESS",
    "BY_NAME",
    "SOLIS_INPUT_REGISTERS",
    "SOLIS_REGISTER_TABLE",
    "SUPPORTED_WIDTHS",
    "RegisterDefinition",
    "RegisterTable",
]
