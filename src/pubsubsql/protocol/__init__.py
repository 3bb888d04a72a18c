"""
pubsubsql Protocol Layer
========================

What travels over the connection, independent of how it travels there.

Field Vocabulary (fields.py)
    Canonical names for the response envelope keys, and the reserved
    request id used for published changes.

Framing (wire.py)
    Length and request id header around each payload; reassembly of
    frames from a byte stream.

Response Model (response.py)
    The decoded response envelope: status, action, pubsubid, and one
    batch of a (possibly larger) result set.

The protocol layer MUST NOT depend on any transport implementation.
"""

from . import fields
from . import wire
from .response import Response


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
