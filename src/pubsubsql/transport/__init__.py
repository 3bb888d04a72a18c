"""Transport layer implementations."""

from .base import (
    ConnectionError,
    Frame,
    Transport,
    TransportError,
)

from .zmq.stream import Stream
