import pubsubsql
import pytest

from pubsubsql.protocol import Response


def test_defaults():

    response = Response()

    assert response.status == ''
    assert response.ok == False
    assert response.rows == 0
    assert response.columns is None
    assert response.values == []
    assert response.has_result_set == False


def test_decode_select():

    raw = b'{"status":"ok","action":"select","rows":3,"fromrow":1,"torow":2,' \
          b'"columns":["id","Ticker"],"data":[["1","GOOG"],["2","MSFT"]]}'

    response = Response.decode(raw)

    assert response.ok
    assert response.action == 'select'
    assert response.rows == 3
    assert response.fromrow == 1
    assert response.torow == 2
    assert response.columns == ['id', 'Ticker']
    assert response.values == [['1', 'GOOG'], ['2', 'MSFT']]
    assert response.has_result_set
    assert response.complete == False


def test_decode_failure_status():

    response = Response.decode(b'{"status":"err","msg":"key already defined"}')

    assert response.ok == False
    assert response.message == 'key already defined'
    assert response.has_result_set == False


def test_decode_missing_fields():

    response = Response.decode(b'{}')

    assert response.status == ''
    assert response.pubsubid == ''
    assert response.columns is None
    assert response.values == []


@pytest.mark.parametrize('raw', (
    b'',
    b'not json',
    b'["status", "ok"]',
    b'{"status": 1}',
    b'{"status": "ok", "rows": "3"}',
    b'{"status": "ok", "rows": true}',
    b'{"status": "ok", "columns": "id"}',
    b'{"status": "ok", "columns": ["id", 2]}',
    b'{"status": "ok", "data": [["1", 2]]}',
    b'{"status": "ok", "data": ["1"]}',
    b'{"status": "ok", "rows": 3, "fromrow": 1, "torow": 2, "data": [["1"]]}',
    b'{"status": "ok", "rows": 1, "fromrow": 1, "torow": 2, "data": [["x"], ["y"]]}',
    b'{"status": "ok", "rows": 3, "fromrow": 3, "torow": 2, "data": []}',
    b'{"status": "ok", "rows": -1}',
    b'{"status": "ok", "rows": 3, "fromrow": -1, "torow": 1, "data": [["x"], ["y"], ["z"]]}',
))
def test_decode_malformed(raw):

    with pytest.raises(ValueError):
        Response.decode(raw)


def test_round_trip():

    values = [['007', '1e3', ''], ['ünïcødé', '"quoted"', 'a\\b\nc']]
    response = Response('ok', '', 'select', '3', 10, 4, 5, ['a', 'b', 'c'], values)

    decoded = Response.decode(response.encode())

    assert decoded.status == 'ok'
    assert decoded.action == 'select'
    assert decoded.pubsubid == '3'
    assert decoded.rows == 10
    assert decoded.fromrow == 4
    assert decoded.torow == 5
    assert decoded.columns == ['a', 'b', 'c']
    assert decoded.values == values

    for row, original in zip(decoded.values, values):
        for cell, expected in zip(row, original):
            assert cell.encode('utf-8') == expected.encode('utf-8')


def test_wire_field_names():

    response = Response('ok', 'm', 'insert', 'p', 1, 1, 1, ['c'], [['v']])
    envelope = pubsubsql.json.loads(response.encode())

    assert sorted(envelope) == sorted(('status', 'msg', 'action', 'pubsubid', 'rows', 'fromrow', 'torow', 'columns', 'data'))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
