"""Transport-specific exceptions.

All transport exceptions inherit from :class:`~pysolis.exceptions.SolisError`
so callers can use a single ``except SolisError`` to catch serial failures
together with decode and publish failures.
"""

from __future__ import annotations

from pysolis.exceptions import SolisError


class TransportError(SolisError):
    """Base exception for all transport errors."""

    pass


class TransportConnectionError(TransportError):
    """Failed to connect to the device."""

    pass


class TransportTimeoutError(TransportError):
    """Operation timed out."""

    pass


class TransportReadError(TransportError):
    """Failed to read data from device."""

    pass
