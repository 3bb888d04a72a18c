""" The failure taxonomy for a pubsubsql :class:`pubsubsql.Client`.

    Internally every failure is raised as one of the exceptions below; the
    public :class:`pubsubsql.Client` methods catch them and record the most
    recent one as the client's error state, returning False to the caller.
    The caller inspects the outcome via :func:`Client.ok`,
    :func:`Client.failed`, :func:`Client.error`, and :func:`Client.error_kind`.

    Failures flagged as *fatal* also tear down the connection: the client
    must :func:`Client.connect` again before it is usable.
"""

import enum


class ErrorKind(enum.Enum):

    INVALID_ADDRESS = 'invalid address'
    CONNECTION = 'connection'
    TRANSPORT = 'transport'
    READ_TIMEOUT = 'read timeout'
    SERVER = 'server'
    PROTOCOL = 'protocol'


class Error(Exception):
    """ Base class for all pubsubsql client failures.
    """

    kind = None
    fatal = False


class InvalidAddress(Error):
    """ The address is not of the form host:port, or the port is not a
        valid TCP port number. No I/O was attempted.
    """

    kind = ErrorKind.INVALID_ADDRESS


class ConnectionError(Error):
    """ The transport could not establish a connection to the server.
    """

    kind = ErrorKind.CONNECTION


class TransportError(Error):
    """ A read or write failed on an established connection, or no
        connection is open.
    """

    kind = ErrorKind.TRANSPORT
    fatal = True


class ReadTimeout(Error):
    """ The server did not answer a synchronous command in time.
    """

    kind = ErrorKind.READ_TIMEOUT


class ServerError(Error):
    """ The server rejected the command, or its response could not be
        decoded. Carries the server's message.
    """

    kind = ErrorKind.SERVER


class ProtocolError(Error):
    """ A frame arrived with a request id that cannot occur under the
        protocol, such as an answer to a request not yet sent.
    """

    kind = ErrorKind.PROTOCOL
    fatal = True


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
