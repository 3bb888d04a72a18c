"""ZeroMQ raw TCP transport.

The pubsubsql server speaks plain TCP, not ZMTP; a ZeroMQ STREAM socket is
the ZeroMQ way to talk to such a peer. Every message received on a STREAM
socket is a (routing id, data) pair:

    - an empty *data* part the first time is the connect notification;
    - an empty *data* part afterwards means the peer closed the connection;
    - anything else is a chunk of the byte stream, with no regard for
      frame boundaries.

Sending an empty data part closes the connection from our side.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Optional

import zmq

from ...errors import ConnectionError, TransportError
from ...protocol import wire
from ..base import Frame, Transport


logger = logging.getLogger(__name__)
zmq_context = zmq.Context.instance()


class Stream(Transport):
    """Connect to a pubsubsql server at *address*:*port* and exchange
    framed messages with it.

    The constructor blocks up to *timeout* seconds waiting for the TCP
    connection; if it does not come up, :class:`ConnectionError` is raised.
    Automatic reconnection is disabled: once the peer goes away the
    transport stays invalid, and a new :class:`Stream` is required.
    """

    # Milliseconds to keep flushing queued outbound data after close().
    linger = 100

    def __init__(self, address: str, port: int, timeout: float = 10.0, buffer_size: Optional[int] = None):
        self.address = address
        self.port = int(port)

        self.reader = wire.FrameReader()
        self.routing_id: Optional[bytes] = None
        self._valid = False

        server = f"tcp://{address}:{self.port}"

        self.socket = zmq_context.socket(zmq.STREAM)
        self.socket.setsockopt(zmq.LINGER, self.linger)
        self.socket.setsockopt(zmq.RECONNECT_IVL, -1)
        self.socket.setsockopt(zmq.STREAM_NOTIFY, 1)
        if buffer_size:
            self.socket.setsockopt(zmq.RCVBUF, int(buffer_size))

        self.poller = zmq.Poller()
        self.poller.register(self.socket, zmq.POLLIN)

        try:
            self.socket.connect(server)
            self._await_connection(timeout)
        except zmq.ZMQError as exc:
            self._close_socket()
            raise ConnectionError(f"{server}: {exc}") from exc
        except ConnectionError:
            self._close_socket()
            raise

        logger.debug("connected to %s", server)

    def _await_connection(self, timeout: float) -> None:
        deadline = time.monotonic() + timeout

        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise ConnectionError(
                    f"{self.address}:{self.port}: no connection in {timeout:.2f} sec"
                )

            if not self._poll(remaining):
                continue

            # The first message is normally the empty connect notification.

            routing_id, data = self.socket.recv_multipart()
            self.routing_id = routing_id
            self._valid = True
            self.reader.feed(data)
            return

    def _poll(self, timeout: float) -> bool:
        events = dict(self.poller.poll(math.ceil(max(timeout, 0) * 1000)))
        return self.socket in events

    @property
    def is_valid(self) -> bool:
        return self._valid

    def write_frame(self, request_id: int, payload: bytes) -> None:
        if not self._valid:
            raise TransportError("not connected")

        frame = wire.pack_frame(request_id, payload)

        try:
            self.socket.send_multipart((self.routing_id, frame))
        except zmq.ZMQError as exc:
            self._valid = False
            raise TransportError(f"write failed: {exc}") from exc

    def read_frame(self, timeout: float) -> Optional[Frame]:
        if not self._valid:
            raise TransportError("not connected")

        deadline = time.monotonic() + timeout

        while True:
            frame = self.reader.next()
            if frame is not None:
                return frame

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return None

            try:
                if not self._poll(remaining):
                    return None
                _routing_id, data = self.socket.recv_multipart()
            except zmq.ZMQError as exc:
                self._valid = False
                raise TransportError(f"read failed: {exc}") from exc

            if data == b"":
                self._valid = False
                raise TransportError("connection closed by server")

            self.reader.feed(data)

    def close(self) -> None:
        if self.socket.closed:
            return

        if self._valid:
            try:
                self.socket.send_multipart((self.routing_id, b""))
            except zmq.ZMQError as exc:
                logger.debug("close notice not sent: %s", exc)

        self._close_socket()
        logger.debug("closed connection to %s:%d", self.address, self.port)

    def _close_socket(self) -> None:
        self._valid = False
        self.reader.clear()
        self.socket.close(linger=self.linger)
