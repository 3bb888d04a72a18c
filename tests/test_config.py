import pubsubsql
import pytest


def test_defaults():

    settings = pubsubsql.config.load(dict())

    assert settings.address == 'localhost:7777'
    assert settings.read_timeout == 180
    assert settings.connect_timeout == 10
    assert settings.buffer_size is None
    assert settings.push_deadline == False


def test_environment():

    environ = dict()
    environ['PUBSUBSQL_ADDRESS'] = 'db:7000'
    environ['PUBSUBSQL_READ_TIMEOUT'] = '2.5'
    environ['PUBSUBSQL_CONNECT_TIMEOUT'] = '1'
    environ['PUBSUBSQL_BUFFER_SIZE'] = '65536'
    environ['PUBSUBSQL_PUSH_DEADLINE'] = 'Yes'

    settings = pubsubsql.config.load(environ)

    assert settings.address == 'db:7000'
    assert settings.read_timeout == 2.5
    assert settings.connect_timeout == 1
    assert settings.buffer_size == 65536
    assert settings.push_deadline == True


@pytest.mark.parametrize('name,value', (
    ('PUBSUBSQL_READ_TIMEOUT', 'soon'),
    ('PUBSUBSQL_READ_TIMEOUT', '0'),
    ('PUBSUBSQL_CONNECT_TIMEOUT', '-1'),
    ('PUBSUBSQL_BUFFER_SIZE', '2k'),
    ('PUBSUBSQL_PUSH_DEADLINE', 'maybe'),
))
def test_invalid(name, value):

    with pytest.raises(ValueError) as excinfo:
        pubsubsql.config.load({name: value})

    assert name in str(excinfo.value)


def test_client_uses_settings(monkeypatch):

    environ = dict()
    environ['PUBSUBSQL_READ_TIMEOUT'] = '3'
    environ['PUBSUBSQL_PUSH_DEADLINE'] = 'on'

    monkeypatch.setattr(pubsubsql.config, 'settings', pubsubsql.config.load(environ))

    client = pubsubsql.Client()
    assert client.read_timeout == 3
    assert client.push_deadline == True

    # Constructor arguments win over the environment.

    client = pubsubsql.Client(read_timeout=7, push_deadline=False)
    assert client.read_timeout == 7
    assert client.push_deadline == False


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
