from httpbytes.http import Request
from httpbytes.http import Response
from httpbytes.test.tutils import treq
from httpbytes.test.tutils import tresp
from httpbytes.types import EMPTY
from httpbytes.types import JsonBody
from httpbytes.types import RawBody


def test_request_defaults():
    r = Request()
    assert r.method == "get"
    assert r.url == ""
    assert r.headers == {}
    assert r.data == EMPTY
    assert r.header_fields == []


def test_request_data_is_classified():
    assert treq().data == RawBody(b"content")
    assert treq(data={"a": 1}).data == JsonBody({"a": 1})


def test_request_to_dict():
    assert treq(data={"a": 1}).to_dict() == {
        "method": "get",
        "url": "/path",
        "headers": {"header": "qvalue"},
        "data": {"a": 1},
    }


def test_response_to_dict():
    assert tresp().to_dict() == {
        "data": b"message",
        "status": 200,
        "statusText": "OK",
        "headers": {"header-response": "svalue"},
        "config": {},
        "request": {},
    }
    assert Response(status=204, status_text="No Content").to_dict()["data"] == b""


def test_get_all():
    r = Response(
        headers={"set-cookie": "b=2"},
        header_fields=[("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")],
    )
    assert r.get_all("set-cookie") == ["a=1", "b=2"]
    assert r.get_all("missing") == []

    # without raw fields, fall back to the mapping
    r = Request(headers={"X-A": "1"})
    assert r.get_all("x-a") == ["1"]
