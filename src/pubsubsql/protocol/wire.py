""" Framing for the pubsubsql TCP stream. Every frame, in either direction,
    is an eight byte header followed by the payload::

        [payload size: uint32 BE][request id: uint32 BE][payload...]

    Commands travel as UTF-8 text, responses as UTF-8 JSON.
"""

from __future__ import annotations

import struct
from typing import Optional, Tuple

from . import fields


header = struct.Struct('>II')
HEADER_SIZE = header.size


def pack_frame(request_id: int, payload: bytes) -> bytes:
    """ Return the on-the-wire bytes for one frame.
    """

    if request_id < 0 or request_id > fields.MAX_REQUEST_ID:
        raise ValueError("request id out of range: %r" % (request_id,))

    return header.pack(len(payload), request_id) + payload


def pack_command(request_id: int, command: str) -> bytes:
    return pack_frame(request_id, command.encode('utf-8'))


class FrameReader:
    """ Reassemble frames from a byte stream delivered in arbitrary chunks.
        Bytes are added with :func:`feed`; complete frames are removed with
        :func:`next`. A partially received frame stays buffered until the
        rest of it arrives.
    """

    def __init__(self):
        self.buffer = bytearray()


    def __len__(self):
        return len(self.buffer)


    def feed(self, data: bytes) -> None:
        self.buffer += data


    def next(self) -> Optional[Tuple[int, bytes]]:
        """ Return the next complete frame as a (request id, payload) tuple,
            or None if a full frame is not yet buffered.
        """

        buffer = self.buffer

        if len(buffer) < HEADER_SIZE:
            return None

        size, request_id = header.unpack_from(buffer)
        end = HEADER_SIZE + size

        if len(buffer) < end:
            return None

        payload = bytes(buffer[HEADER_SIZE:end])
        del buffer[:end]
        return request_id, payload


    def clear(self) -> None:
        self.buffer.clear()


# end of class FrameReader


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
