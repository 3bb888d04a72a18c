import pytest

import pubsubsql
import scripted


@pytest.fixture
def transport():
    return scripted.ScriptedTransport()


@pytest.fixture
def client(transport):
    """ A :class:`pubsubsql.Client` connected to a scripted transport.
    """

    client = pubsubsql.Client(transport=transport.open, read_timeout=5)
    assert client.connect('localhost:7777')
    return client


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
