"""Exceptions raised by pysolis.

Every error derives from :class:`SolisError`, so the bridge entry point can
use a single ``except SolisError`` to turn any failure of a poll pass into a
non-zero exit status.
"""

from __future__ import annotations


class SolisError(Exception):
    """Base exception for all pysolis errors."""

    pass


class ConfigError(SolisError):
    """Invalid register definition, register table or bridge settings."""

    pass


class DecodeError(SolisError):
    """Raw register words could not be decoded."""

    pass


class UnexpectedLengthError(DecodeError):
    """The transport returned a different number of words than requested.

    This is a protocol violation, never something to truncate or pad.
    """

    def __init__(self, name: str, expected: int, actual: int) -> None:
        """Initialize with the register name and word counts.

        Args:
            name: Name of the register being decoded
            expected: Number of words the register's width requires
            actual: Number of words actually received
        """
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"Register '{name}' expected {expected} word(s), got {actual}")


class PublishError(SolisError):
    """The broker rejected or failed to acknowledge a message."""

    pass
