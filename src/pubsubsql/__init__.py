""" Python client for the pubsubsql server. A :class:`Client` executes SQL
    commands over a single connection, iterates result sets that arrive in
    batches, and delivers changes the server publishes to subscribers.

    Typical use::

        client = pubsubsql.Client()
        if client.connect('localhost:7777') and client.execute('select * from Stocks'):
            while client.next_row():
                print(client.value('Ticker'))
"""

# Utility components.

from . import json
from . import config
from . import errors

# Submodules used by multiple other components.

from . import protocol
from . import transport

# Primary public-facing interfaces.

from .client import Client
from .errors import ErrorKind


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
