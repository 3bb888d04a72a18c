"""Transport interface.

This is the (small) contract that transport implementations follow. It
lives outside :mod:`pubsubsql.protocol` so the protocol remains
transport-agnostic, and outside :mod:`pubsubsql.client` so the client can
be driven by any implementation, including scripted ones in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from ..errors import ConnectionError, TransportError


Frame = Tuple[int, bytes]


class Transport(ABC):
    """Minimal contract for a framed, request-id tagged byte transport.

    Implementations connect in their constructor, raising
    :class:`ConnectionError` if the connection cannot be established.
    """

    @abstractmethod
    def write_frame(self, request_id: int, payload: bytes) -> None:
        """Send one frame. Raises :class:`TransportError` on failure."""

    @abstractmethod
    def read_frame(self, timeout: float) -> Optional[Frame]:
        """Return the next (request id, payload) frame.

        Blocks at most *timeout* seconds; returns None if no complete frame
        arrived in that window. Raises :class:`TransportError` on I/O
        failure or if the peer closed the connection.
        """

    @abstractmethod
    def close(self) -> None:
        """Release the connection. Calling this more than once is harmless."""

    @property
    def is_valid(self) -> bool:
        """Whether the connection is currently usable."""
        return False


__all__ = ('ConnectionError', 'Frame', 'Transport', 'TransportError')
