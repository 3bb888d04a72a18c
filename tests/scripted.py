""" An in-memory stand-in for a pubsubsql connection. The test loads up
    the frames the "server" will send, in order; the client under test
    reads them back and every write and read is recorded for inspection.
"""

import collections

import pubsubsql
from pubsubsql.protocol import Response


class ScriptedTransport(pubsubsql.transport.Transport):

    def __init__(self):
        self.inbound = collections.deque()
        self.written = list()
        self.reads = list()
        self.opened = list()
        self.closed = 0
        self.fail_write = False
        self._valid = False


    def open(self, host, port):
        """ Used as the transport factory handed to :class:`pubsubsql.Client`.
        """

        self.opened.append((host, port))
        self._valid = True
        return self


    @property
    def is_valid(self):
        return self._valid


    def send(self, *frames):
        """ Queue frames for the client to read. A frame is a (request id,
            payload) tuple; None stands for a read that times out, and an
            exception instance is raised from the read that reaches it.
        """

        self.inbound.extend(frames)


    def write_frame(self, request_id, payload):
        if not self._valid:
            raise pubsubsql.errors.TransportError('not connected')
        if self.fail_write:
            self._valid = False
            raise pubsubsql.errors.TransportError('broken pipe')
        self.written.append((request_id, payload))


    def read_frame(self, timeout):
        if not self._valid:
            raise pubsubsql.errors.TransportError('not connected')

        self.reads.append(timeout)

        if not self.inbound:
            return None

        frame = self.inbound.popleft()

        if isinstance(frame, Exception):
            self._valid = False
            raise frame

        return frame


    def close(self):
        self.closed += 1
        self._valid = False


    @property
    def commands(self):
        return [payload.decode() for request_id, payload in self.written]


    @property
    def request_ids(self):
        return [request_id for request_id, payload in self.written]


# end of class ScriptedTransport



def ok(request_id, action='insert', **kwargs):
    response = Response('ok', action=action, **kwargs)
    return request_id, response.encode()


def failure(request_id, message):
    response = Response('err', message=message)
    return request_id, response.encode()


def batch(request_id, columns, values, fromrow, rows, action='select', pubsubid=''):
    """ One batch of a result set of *rows* total rows, starting at the
        1-based row *fromrow*.
    """

    torow = fromrow + len(values) - 1
    response = Response('ok', '', action, pubsubid, rows, fromrow, torow, columns, values)
    return request_id, response.encode()


def push(action, columns, values, pubsubid='1'):
    return batch(0, columns, values, 1, len(values), action=action, pubsubid=pubsubid)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
