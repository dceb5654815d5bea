"""Decode raw register words into engineering-unit values.

All functions here are pure: no I/O, no shared state.  The poller and the
register dump tool both build on them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pysolis.exceptions import DecodeError, UnexpectedLengthError

if TYPE_CHECKING:
    from pysolis.registers import RegisterDefinition

WORD_MAX = 0xFFFF


@dataclass(frozen=True)
class DecodedReading:
    """A register paired with the value decoded from one read."""

    register: RegisterDefinition
    value: float


def combine_words(words: Sequence[int]) -> int:
    """Concatenate 16-bit words big-endian into one unsigned integer.

    The first word is the most significant: ``[hi, lo]`` gives
    ``(hi << 16) | lo``.

    Raises:
        DecodeError: If a word is outside 0..65535
    """
    value = 0
    for word in words:
        if not 0 <= word <= WORD_MAX:
            raise DecodeError(f"Register word {word} is not an unsigned 16-bit value")
        value = (value << 16) | word
    return value


def apply_scale(raw: int, scale: int) -> float:
    """Shift the decimal point of *raw* left by *scale* places."""
    if scale == 0:
        return float(raw)
    return float(raw) / 10**scale


def decode(register: RegisterDefinition, raw: Sequence[int]) -> float:
    """Decode the words read for *register* into a scaled value.

    Args:
        register: Definition the words were read for
        raw: Words returned by the transport, in address order

    Returns:
        The unsigned integer formed by the words, divided by
        ``10 ** register.scale``.

    Raises:
        UnexpectedLengthError: If ``len(raw)`` is not ``register.word_count``
        DecodeError: If a word is outside 0..65535
    """
    if len(raw) != register.word_count:
        raise UnexpectedLengthError(register.name, register.word_count, len(raw))
    return apply_scale(combine_words(raw), register.scale)


def decode_reading(register: RegisterDefinition, raw: Sequence[int]) -> DecodedReading:
    """Decode *raw* and pair the value with its register."""
    return DecodedReading(register=register, value=decode(register, raw))
