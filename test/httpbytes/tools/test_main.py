import io
import json

import pytest

from httpbytes.converter import HttpConverter
from httpbytes.tools import main
from httpbytes.types import EMPTY
from httpbytes.types import FormBody
from httpbytes.types import JsonBody
from httpbytes.types import RawBody
from httpbytes.types import TextBody
from httpbytes.test.tutils import tform


def test_body_to_state():
    assert main.body_to_state(EMPTY) is None
    assert main.body_to_state(TextBody("x")) == "x"
    assert main.body_to_state(JsonBody({"a": [1]})) == {"a": [1]}
    assert main.body_to_state(RawBody(b"\x00\xff")) == {"bytes": r"\x00\xff"}
    assert main.body_to_state(RawBody(b"a\nb")) == {"bytes": "a\nb"}
    assert main.body_to_state(FormBody(tform())) == {
        "form": [
            {"name": "username", "value": "john"},
            {
                "name": "avatar",
                "filename": "avatar.png",
                "content_type": "image/png",
                "content": {"bytes": r"\x89PNG\r\n\x1a\n\x00\xff"},
            },
        ]
    }


def test_load():
    r = main.load_request({"method": "post", "url": "/", "data": {"a": 1}})
    assert r.method == "post"
    assert r.data == JsonBody({"a": 1})
    r = main.load_response({"status": 404, "statusText": "Not Found"})
    assert r.status == 404
    assert r.status_text == "Not Found"
    assert r.data == EMPTY


@pytest.mark.asyncio
async def test_convert():
    c = HttpConverter()
    out = io.BytesIO()
    await main.convert(c, "decode-request", b"GET /x HTTP/1.1\r\nHost: a\r\n\r\n", out)
    assert json.loads(out.getvalue()) == {
        "method": "get",
        "url": "/x",
        "headers": {"host": "a"},
        "data": None,
    }

    out = io.BytesIO()
    await main.convert(
        c,
        "decode-response",
        b"HTTP/1.1 200 OK\r\ncontent-type: application/json\r\n\r\n[1]",
        out,
    )
    assert json.loads(out.getvalue())["data"] == [1]

    out = io.BytesIO()
    await main.convert(c, "encode-request", b'{"url": "/", "data": {"a": 1}}', out)
    assert out.getvalue() == (
        b"GET / HTTP/1.1\r\ncontent-type: application/json\r\ncontent-length: 7\r\n\r\n"
        b'{"a":1}'
    )

    out = io.BytesIO()
    await main.convert(c, "encode-response", b'{"status": 201, "statusText": "Created"}', out)
    assert out.getvalue() == b"HTTP/1.1 201 Created\r\n\r\n"

    with pytest.raises(ValueError):
        await main.convert(c, "nope", b"", out)


def test_httpbytes(tmp_path, capsys):
    assert main.httpbytes(["--version"]) == 0
    assert "httpbytes" in capsys.readouterr().out

    assert main.httpbytes([]) == 2

    p = tmp_path / "req.http"
    p.write_bytes(b"GET\r\n\r\n")
    assert main.httpbytes(["decode-request", str(p)]) == 1
    assert "INVALID_HTTP_FORMAT: Invalid request line" in capsys.readouterr().err

    assert main.httpbytes(["decode-request", str(tmp_path / "missing")]) == 1


def test_httpbytes_decode(tmp_path, capfdbinary):
    p = tmp_path / "req.http"
    p.write_bytes(b"POST /x HTTP/1.1\r\nX-A: 1\r\n\r\nbody")
    assert main.httpbytes(["decode-request", "--preserve-header-case", str(p)]) == 0
    state = json.loads(capfdbinary.readouterr().out)
    assert state["headers"] == {"X-A": "1"}
    assert state["data"] == {"bytes": "body"}


def test_httpbytes_max_body_size(tmp_path, capsys):
    p = tmp_path / "req.http"
    p.write_bytes(b"POST /x HTTP/1.1\r\n\r\n" + b"x" * 2048)
    assert main.httpbytes(["decode-request", "--max-body-size", "1k", str(p)]) == 1
    assert "BODY_TOO_LARGE" in capsys.readouterr().err

    with pytest.raises(SystemExit):
        main.httpbytes(["decode-request", "--max-body-size", "lots", str(p)])
