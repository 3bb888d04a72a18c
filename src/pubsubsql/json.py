''' Pick the fastest JSON library available at import time and present it
    through a uniform interface: :func:`dumps` always returns bytes,
    :func:`loads` accepts bytes or str, and :data:`DecodeError` is the
    exception raised for malformed input.

    The pubsubsql server speaks JSON for every response, including each
    batch of a large result set, so the decoder sits on the hot path of
    row iteration.
'''

msgspec = None
orjson = None
json = None

try:
    import msgspec
except ImportError:
    pass

if msgspec is None:
    try:
        import orjson
    except ImportError:
        pass

if msgspec is None and orjson is None:
    import json


def _stdlib_dumps(value):
    return json.dumps(value, separators=(',', ':')).encode()


if msgspec is not None:
    backend = 'msgspec'
    _encoder = msgspec.json.Encoder()
    _decoder = msgspec.json.Decoder()
    dumps = _encoder.encode
    loads = _decoder.decode
    DecodeError = msgspec.DecodeError
elif orjson is not None:
    backend = 'orjson'
    dumps = orjson.dumps
    loads = orjson.loads
    DecodeError = orjson.JSONDecodeError
else:
    backend = 'json'
    dumps = _stdlib_dumps
    loads = json.loads
    DecodeError = json.JSONDecodeError

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
