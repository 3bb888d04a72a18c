""" Environment-driven defaults for :class:`pubsubsql.Client`. Every value
    here can be overridden per client via constructor arguments; the
    environment only changes the defaults.

    ``PUBSUBSQL_ADDRESS``
        host:port used by :func:`Client.connect` when called without an
        address.
    ``PUBSUBSQL_READ_TIMEOUT``
        Seconds to wait for each frame of a synchronous command.
    ``PUBSUBSQL_CONNECT_TIMEOUT``
        Seconds to wait for the TCP connection to come up.
    ``PUBSUBSQL_BUFFER_SIZE``
        Socket receive buffer size in bytes; unset means the OS default.
    ``PUBSUBSQL_PUSH_DEADLINE``
        If true, the timeout given to :func:`Client.wait_for_push` bounds
        the whole call rather than each individual read.
"""

import collections
import os


Settings = collections.namedtuple('Settings', ('address', 'read_timeout', 'connect_timeout', 'buffer_size', 'push_deadline'))

_true = set(('1', 'true', 'yes', 'on'))
_false = set(('', '0', 'false', 'no', 'off'))


def _seconds(environ, name, default):

    raw = environ.get(name)
    if raw is None:
        return default

    try:
        value = float(raw)
    except ValueError:
        raise ValueError("%s must be a number of seconds, not %r" % (name, raw))

    if value <= 0:
        raise ValueError("%s must be positive, not %r" % (name, raw))

    return value


def _bytes(environ, name):

    raw = environ.get(name)
    if raw is None or raw == '':
        return None

    try:
        value = int(raw)
    except ValueError:
        raise ValueError("%s must be an integer byte count, not %r" % (name, raw))

    if value <= 0:
        raise ValueError("%s must be positive, not %r" % (name, raw))

    return value


def _flag(environ, name):

    raw = environ.get(name, '').strip().lower()

    if raw in _true:
        return True
    if raw in _false:
        return False

    raise ValueError("%s must be a boolean, not %r" % (name, raw))


def load(environ=None):
    """ Return a :class:`Settings` populated from *environ*, which defaults
        to :data:`os.environ`. A malformed value raises :class:`ValueError`
        naming the offending variable.
    """

    if environ is None:
        environ = os.environ

    address = environ.get('PUBSUBSQL_ADDRESS', 'localhost:7777')
    read_timeout = _seconds(environ, 'PUBSUBSQL_READ_TIMEOUT', 180.0)
    connect_timeout = _seconds(environ, 'PUBSUBSQL_CONNECT_TIMEOUT', 10.0)
    buffer_size = _bytes(environ, 'PUBSUBSQL_BUFFER_SIZE')
    push_deadline = _flag(environ, 'PUBSUBSQL_PUSH_DEADLINE')

    return Settings(address, read_timeout, connect_timeout, buffer_size, push_deadline)


settings = load()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
