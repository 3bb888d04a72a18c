""" A class representation of a pubsubsql response envelope: the decoded
    JSON answer to a command, or the body of a published (pushed) change.
"""

from .. import json
from . import fields


class Response:
    """ The :class:`Response` is a thin container for the fields of a
        server response. A large result set is delivered as a series of
        responses sharing one request id; each one carries a single
        *batch* of rows.

        :ivar status: 'ok' for success, anything else is a failure.
        :ivar message: The server's error text, meaningful on failure.
        :ivar action: The operation this response reports on, such as
            'select', 'insert', 'add', or 'remove'.
        :ivar pubsubid: Identifier assigned by a successful subscribe.
        :ivar rows: Total rows in the full result set.
        :ivar fromrow: 1-based index of the first row in this batch.
        :ivar torow: 1-based index of the last row in this batch.
        :ivar columns: Ordered column names, or None if absent.
        :ivar values: The rows of this batch, each a list of strings.
    """

    def __init__(self, status='', message='', action='', pubsubid='', rows=0, fromrow=0, torow=0, columns=None, values=None):

        self.status = status
        self.message = message
        self.action = action
        self.pubsubid = pubsubid
        self.rows = rows
        self.fromrow = fromrow
        self.torow = torow
        self.columns = columns

        if values is None:
            values = list()

        self.values = values


    def __repr__(self):
        return 'Response(%s)' % (self.encode().decode())


    @property
    def ok(self):
        return self.status == fields.OK


    @property
    def has_result_set(self):
        return self.rows != 0 and self.fromrow != 0 and self.torow != 0


    @property
    def complete(self):
        """ True if this batch is the last one of its result set.
        """

        return self.torow == self.rows


    def encode(self):
        """ Return the JSON encoding of this response, using the field names
            the server puts on the wire. Absent columns are omitted.
        """

        envelope = dict()
        envelope[fields.STATUS] = self.status
        envelope[fields.MSG] = self.message
        envelope[fields.ACTION] = self.action
        envelope[fields.PUBSUBID] = self.pubsubid
        envelope[fields.ROWS] = self.rows
        envelope[fields.FROMROW] = self.fromrow
        envelope[fields.TOROW] = self.torow

        if self.columns is not None:
            envelope[fields.COLUMNS] = self.columns

        envelope[fields.DATA] = self.values
        return json.dumps(envelope)


    @classmethod
    def decode(cls, raw):
        """ Build a :class:`Response` from the raw JSON bytes of a frame.
            Missing fields take their empty defaults; fields of the wrong
            type, or a batch whose row range disagrees with the rows it
            carries, raise :class:`ValueError`.
        """

        try:
            envelope = json.loads(raw)
        except json.DecodeError as e:
            raise ValueError('malformed response: ' + str(e))

        if not isinstance(envelope, dict):
            raise ValueError('malformed response: expected a JSON object')

        response = cls()
        response.status = _string(envelope, fields.STATUS)
        response.message = _string(envelope, fields.MSG)
        response.action = _string(envelope, fields.ACTION)
        response.pubsubid = _string(envelope, fields.PUBSUBID)
        response.rows = _integer(envelope, fields.ROWS)
        response.fromrow = _integer(envelope, fields.FROMROW)
        response.torow = _integer(envelope, fields.TOROW)

        columns = envelope.get(fields.COLUMNS)
        if columns is not None:
            _strings(columns, fields.COLUMNS)
        response.columns = columns

        values = envelope.get(fields.DATA)
        if values is None:
            values = list()
        elif not isinstance(values, list):
            raise ValueError("malformed response: '%s' must be a list" % (fields.DATA))

        for row in values:
            _strings(row, fields.DATA)

        response.values = values

        counts = {fields.ROWS: response.rows, fields.FROMROW: response.fromrow, fields.TOROW: response.torow}
        for key, count in counts.items():
            if count < 0:
                raise ValueError("malformed response: '%s' is negative" % (key))

        if response.fromrow and response.torow:
            if response.fromrow > response.torow or response.torow > response.rows:
                raise ValueError('malformed response: rows %d..%d of %d' % (response.fromrow, response.torow, response.rows))

            expected = response.torow - response.fromrow + 1
            if expected != len(values):
                raise ValueError('malformed response: rows %d..%d but %d carried' % (response.fromrow, response.torow, len(values)))

        return response


# end of class Response



def _string(envelope, key):

    value = envelope.get(key)

    if value is None:
        return ''
    if isinstance(value, str):
        return value

    raise ValueError("malformed response: '%s' must be a string" % (key))


def _integer(envelope, key):

    value = envelope.get(key)

    if value is None:
        return 0

    # bool is an int subclass, but true/false is not a row count.

    if isinstance(value, int) and not isinstance(value, bool):
        return value

    raise ValueError("malformed response: '%s' must be an integer" % (key))


def _strings(sequence, key):

    if not isinstance(sequence, list):
        raise ValueError("malformed response: '%s' must be a list" % (key))

    for item in sequence:
        if not isinstance(item, str):
            raise ValueError("malformed response: '%s' must contain only strings" % (key))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
