import pytest

from metrics.decode import DecodeError, decode_response


def test_decode_series_envelope():
    body = b'{"status":"ok","series":[{"pointlist":[[1598867910000,0.002],[1598867925000,0.0003]]},{"pointlist":[]}]}'
    d = decode_response(body)
    assert d.status == "ok"
    assert len(d.series) == 2
    assert [p.value for p in d.series[0].pointlist] == [0.002, 0.0003]
    assert d.series[0].pointlist[0].timestamp_ms == 1598867910000
    assert d.series[1].pointlist == ()
    assert d.error_message is None


def test_missing_series_is_empty_not_an_error():
    d = decode_response('{"status":"ok"}')
    assert d.series == ()


def test_null_values_survive():
    d = decode_response('{"status":"ok","series":[{"pointlist":[[1, null]]}]}')
    assert d.series[0].pointlist[0].value is None


def test_backend_error_message():
    assert decode_response('{"status":"error","error":"bad query"}').error_message == "bad query"
    assert decode_response('{"errors":["a","b"]}').error_message == "a; b"


@pytest.mark.parametrize(
    "body",
    [
        "not json",
        "[1, 2]",
        '{"series": {"pointlist": []}}',
        '{"series": ["x"]}',
        '{"series": [{"pointlist": "nope"}]}',
        '{"series": [{"pointlist": [[1]]}]}',
        '{"series": [{"pointlist": [[1, true]]}]}',
        '{"series": [{"pointlist": [[1, "0.5"]]}]}',
        '{"series": [{"pointlist": [[Infinity, 0.5]]}]}',
        b"\xff\xfe\xfa",
        "[" * 200000,
        '{"series": {}}',
        '{"series": 0}',
        '{"series": [{"pointlist": {}}]}',
        '{"series": [{"pointlist": ""}]}',
    ],
)
def test_malformed_bodies_raise_decode_error(body):
    with pytest.raises(DecodeError) as ei:
        decode_response(body)
    assert str(ei.value).startswith("Could not parse JSON body")


def test_deeply_nested_body_is_decode_error():
    with pytest.raises(DecodeError) as ei:
        decode_response('{"series": ' + "[" * 200000 + "]" * 200000 + "}")
    assert str(ei.value).startswith("Could not parse JSON body")
