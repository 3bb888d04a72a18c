"""Protocol constants.

Keep these in one place to avoid stringly-typed response handling. The
envelope key names are fixed by the server and must not change.
"""

STATUS = "status"
MSG = "msg"
ACTION = "action"
PUBSUBID = "pubsubid"
ROWS = "rows"
FROMROW = "fromrow"
TOROW = "torow"
COLUMNS = "columns"
DATA = "data"

# Value of STATUS for a successful command.
OK = "ok"

# Sent, best effort, ahead of closing the connection.
CLOSE = "close"

# Request id carried by every unsolicited publish (push) frame.
PUSH_ID = 0

# Request ids are unsigned 32 bit integers on the wire.
MAX_REQUEST_ID = 0xFFFFFFFF
