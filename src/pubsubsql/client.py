""" The :class:`Client` is the protocol engine for a single connection to a
    pubsubsql server. It matches commands to their responses, holds on to
    published changes that arrive while a command is outstanding, and walks
    result sets that the server delivers in several batches.
"""

import collections
import functools
import logging
import time

from . import config
from . import errors
from .protocol import fields
from .protocol import Response
from .transport import Stream


logger = logging.getLogger(__name__)


class Client:
    """ A connection to a pubsubsql server. Commands are executed one at a
        time; the outcome of each operation is reported as a boolean return
        value, with the reason for a failure available afterwards via
        :func:`ok`, :func:`failed`, :func:`error`, and :func:`error_kind`.

        Every frame the server sends is tagged with a request id. The id of
        the command most recently sent is the only one the client is
        waiting for; frames tagged with id 0 are published changes, and
        frames tagged with an earlier id are leftover batches of a result
        set the caller stopped reading. A frame tagged with a later id
        cannot happen, and the connection is dropped if one arrives.

        A :class:`Client` instance is not thread-safe; use one per thread.

        :ivar read_timeout: Seconds to wait for each frame of a command's
            response before giving up.
        :ivar push_deadline: If True, the *timeout* argument of
            :func:`wait_for_push` bounds the whole call. If False, it bounds
            each read, and the call may take longer when stale frames keep
            arriving.
        :ivar request_id: The request id of the most recent command sent.
            It is not reset by :func:`connect`.
    """

    def __init__(self, transport=None, read_timeout=None, connect_timeout=None, buffer_size=None, push_deadline=None):

        settings = config.settings

        if read_timeout is None:
            read_timeout = settings.read_timeout
        if connect_timeout is None:
            connect_timeout = settings.connect_timeout
        if buffer_size is None:
            buffer_size = settings.buffer_size
        if push_deadline is None:
            push_deadline = settings.push_deadline

        # The transport argument is a callable accepting (host, port) and
        # returning a connected transport.base.Transport instance.

        if transport is None:
            transport = functools.partial(Stream, timeout=connect_timeout, buffer_size=buffer_size)

        self.transport_factory = transport
        self.transport = None

        self.read_timeout = read_timeout
        self.push_deadline = push_deadline
        self.request_id = 0
        self._wrapped = False

        self._backlog = collections.deque()
        self._reset()


    def __enter__(self):
        return self


    def __exit__(self, *exc_info):
        self.disconnect()


    # Connection lifecycle.

    def connect(self, address=None):
        """ Connect to the pubsubsql server at *address*, a string of the
            form host:port. If no address is given, the configured default
            is used. Any existing connection is closed first. Returns True
            on success.
        """

        if address is None:
            address = config.settings.address

        try:
            host, port = _parse_address(address)
        except errors.InvalidAddress as error:
            return self._fail(error)

        self.disconnect()

        try:
            self.transport = self.transport_factory(host, port)
        except errors.ConnectionError as error:
            self.transport = None
            return self._fail(error)

        logger.info("connected to %s:%d", host, port)
        return True


    def disconnect(self):
        """ Disconnect from the server. The server is told the connection is
            closing, if it can be; any pending published changes are
            discarded. Calling this when not connected does nothing harmful.
        """

        self._backlog.clear()
        transport = self.transport

        if transport is not None:
            if transport.is_valid:
                try:
                    transport.write_frame(self._next_request_id(), fields.CLOSE.encode())
                except errors.TransportError as error:
                    logger.debug("close notice not sent: %s", error)

            transport.close()
            self.transport = None
            logger.info('disconnected')

        self._reset()


    def is_connected(self):
        """ Return True if the connection to the server is usable. This
            becomes False after any failure that drops the connection, even
            if :func:`disconnect` was never called.
        """

        transport = self.transport
        return transport is not None and transport.is_valid


    # Error state.

    def ok(self):
        """ Return True if the last operation succeeded.
        """

        return self._failure is None


    def failed(self):
        """ Return True if the last operation failed.
        """

        return self._failure is not None


    def error(self):
        """ Return the error message for the last operation, or an empty
            string if it succeeded.
        """

        if self._failure is None:
            return ''
        return str(self._failure)


    def error_kind(self):
        """ Return the :class:`errors.ErrorKind` of the last failure, or None
            if the last operation succeeded.
        """

        if self._failure is None:
            return None
        return self._failure.kind


    def exception(self):
        """ Return the exception recorded for the last failure, or None. This
            allows a caller who prefers exceptions to ``raise`` it.
        """

        return self._failure


    # Commands.

    def execute(self, command):
        """ Send *command* to the server and wait for its response. Returns
            True if the server accepted the command; the response, including
            the first batch of any result set, is then available via the
            accessor methods.
        """

        self._reset()

        try:
            self._write(command)
            payload = self._await_response()
            self._accept(payload)
        except errors.Error as error:
            return self._fail(error)

        return True


    def send_only(self, command):
        """ Send *command* to the server without waiting for a response.
            Whatever the server sends back will be discarded when the next
            command is executed. Returns True if the command was sent.
        """

        self._reset()

        try:
            self._write(command)
        except errors.Error as error:
            return self._fail(error)

        return True


    def wait_for_push(self, timeout):
        """ Wait up to *timeout* seconds for the server to publish a change
            to a subscribed table. Returns True when a published change is
            available via the accessor methods; returns False if the timeout
            elapsed or an error occurred, use :func:`ok` to tell the two
            apart.

            Published changes that arrived while a command was executing are
            delivered first, oldest first, without touching the network.
        """

        if timeout <= 0:
            return False

        self._reset()

        if self._backlog:
            payload = self._backlog.popleft()
            try:
                self._accept(payload)
            except errors.Error as error:
                return self._fail(error)
            return True

        deadline = None
        if self.push_deadline:
            deadline = time.monotonic() + timeout

        try:
            while True:
                if deadline is None:
                    remaining = timeout
                else:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        return False

                frame = self._read(remaining)
                if frame is None:
                    return False

                request_id, payload = frame
                if request_id == fields.PUSH_ID:
                    self._accept(payload)
                    return True

                logger.debug("discarding abandoned batch for request %d", request_id)

        except errors.Error as error:
            return self._fail(error)


    # Result set traversal.

    def next_row(self):
        """ Move to the next row of the result set. The first call moves to
            the first row. Returns False when there are no more rows, or if
            an error occurred; use :func:`ok` to tell the two apart.

            Additional batches of a large result set are read from the
            server as needed.
        """

        while self.ok():
            response = self._response

            if not response.has_result_set:
                return False

            self._cursor += 1
            if self._cursor <= response.torow - response.fromrow:
                return True

            if response.complete:
                self._cursor -= 1
                return False

            logger.debug("request %d: reading rows after %d of %d", self.request_id, response.torow, response.rows)
            self._reset()

            try:
                frame = self._read(self.read_timeout)
                if frame is None:
                    raise errors.ReadTimeout('read timed out')

                request_id, payload = frame
                if request_id != self.request_id:
                    raise errors.ProtocolError('protocol error: expected request id %d, received %d' % (self.request_id, request_id))

                self._accept(payload)
            except errors.Error as error:
                return self._fail(error)

        return False


    def rows(self):
        """ Generator yielding each remaining row of the result set as a
            dictionary mapping column names to values.
        """

        while self.next_row():
            names = self.columns()
            row = self._response.values[self._cursor]
            yield dict(zip(names, row))


    # Accessors for the current response.

    def value(self, column):
        """ Return the value of *column* in the current row. An empty string
            is returned if there is no such column or no current row.
        """

        ordinal = self._ordinals.get(column)
        if ordinal is None:
            return ''
        return self.value_by_ordinal(ordinal)


    def value_by_ordinal(self, ordinal):
        """ Return the value at zero-based column *ordinal* in the current
            row, or an empty string if the ordinal is out of range or there
            is no current row.
        """

        values = self._response.values

        if ordinal < 0:
            return ''
        if self._cursor < 0 or self._cursor >= len(values):
            return ''

        row = values[self._cursor]

        if ordinal >= len(row) or ordinal >= self.column_count():
            return ''

        return row[ordinal]


    def has_column(self, column):
        return column in self._ordinals


    def column_count(self):
        columns = self._response.columns
        if columns is None:
            return 0
        return len(columns)


    def columns(self):
        """ Return the column names of the result set, in order.
        """

        columns = self._response.columns
        if columns is None:
            return list()
        return list(columns)


    def action(self):
        """ Return the action reported by the last response, such as
            'select', 'insert', 'update', 'delete', 'add', 'remove',
            'subscribe', or 'unsubscribe'.
        """

        return self._response.action


    def pubsubid(self):
        """ Return the identifier the server assigned to a subscription.
            A client subscribed to several tables uses it to tell apart the
            changes published for each.
        """

        return self._response.pubsubid


    def row_count(self):
        """ Return the total number of rows in the result set, across all
            batches.
        """

        return self._response.rows


    def raw_json(self):
        """ Return the undecoded JSON of the last response.
        """

        if self._raw is None:
            return ''
        return self._raw.decode('utf-8', errors='replace')


    # Internal machinery.

    def _reset(self):
        """ Clear the error state and everything known about the last
            response. The request id and the backlog are left alone.
        """

        self._failure = None
        self._response = Response()
        self._ordinals = dict()
        self._raw = None
        self._cursor = -1


    def _fail(self, error):

        if error.fatal:
            logger.warning("dropping connection: %s", error)
            self._hard_disconnect()

        self._reset()
        self._failure = error
        return False


    def _hard_disconnect(self):
        """ Tear down the connection without telling the server.
        """

        self._backlog.clear()

        if self.transport is not None:
            self.transport.close()
            self.transport = None

        self._reset()


    def _next_request_id(self):

        # Request id 0 is reserved for published changes, so the counter
        # wraps from the maximum back to 1.

        if self.request_id >= fields.MAX_REQUEST_ID:
            self.request_id = 1
            self._wrapped = True
        else:
            self.request_id += 1

        return self.request_id


    def _precedes(self, earlier, later):
        """ Return True if request id *earlier* was issued before *later*.
            Once the counter has wrapped the comparison is modulo 2**32, so
            that ids issued just before the wrap still count as earlier
            than those after it. Until then it is a plain comparison.
        """

        if not self._wrapped:
            return earlier < later

        distance = (later - earlier) & fields.MAX_REQUEST_ID
        return 0 < distance < 0x80000000


    def _write(self, command):

        if not self.is_connected():
            raise errors.TransportError('not connected')

        request_id = self._next_request_id()
        self.transport.write_frame(request_id, command.encode('utf-8'))


    def _read(self, timeout):

        if not self.is_connected():
            raise errors.TransportError('not connected')

        return self.transport.read_frame(timeout)


    def _await_response(self):
        """ Read frames until the response to the outstanding request
            arrives, and return its payload.
        """

        expected = self.request_id

        while True:
            frame = self._read(self.read_timeout)
            if frame is None:
                raise errors.ReadTimeout('read timed out')

            request_id, payload = frame

            if request_id == expected:
                return payload

            if request_id == fields.PUSH_ID:
                logger.debug("request %d: queueing published change", expected)
                self._backlog.append(payload)
                continue

            if self._precedes(request_id, expected):
                logger.debug("request %d: discarding stale frame for request %d", expected, request_id)
                continue

            raise errors.ProtocolError('protocol error: invalid request id %d, expected %d' % (request_id, expected))


    def _accept(self, payload):
        """ Decode *payload* as the current response.
        """

        self._raw = payload

        try:
            response = Response.decode(payload)
        except ValueError as e:
            raise errors.ServerError(str(e)) from e

        if not response.ok:
            raise errors.ServerError(response.message)

        ordinals = dict()
        if response.columns is not None:
            for index, column in enumerate(response.columns):
                ordinals[column] = index

        self._response = response
        self._ordinals = ordinals
        self._cursor = -1


# end of class Client



def _parse_address(address):
    """ Split a host:port string, returning a (host, port) tuple.
    """

    host, separator, port = address.rpartition(':')

    if separator == '' or host == '':
        raise errors.InvalidAddress('invalid network address: ' + repr(address))

    try:
        port = int(port, 10)
    except ValueError:
        raise errors.InvalidAddress('invalid port ' + repr(port))

    if port < 1 or port > 65535:
        raise errors.InvalidAddress('invalid port ' + repr(port))

    return host, port


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
