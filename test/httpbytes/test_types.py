import pytest

from httpbytes.types import EMPTY
from httpbytes.types import EmptyBody
from httpbytes.types import FileField
from httpbytes.types import FormBody
from httpbytes.types import JsonBody
from httpbytes.types import MultipartForm
from httpbytes.types import RawBody
from httpbytes.types import TextBody
from httpbytes.types import TextField
from httpbytes.types import as_body


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, EMPTY),
        (b"", EMPTY),
        ("", EMPTY),
        (bytearray(), EMPTY),
        (b"\x00", RawBody(b"\x00")),
        (bytearray(b"ab"), RawBody(b"ab")),
        (memoryview(b"ab"), RawBody(b"ab")),
        ("text", TextBody("text")),
        ({"a": 1}, JsonBody({"a": 1})),
        ([], JsonBody([])),
        (0, JsonBody(0)),
        (False, JsonBody(False)),
        (TextBody("x"), TextBody("x")),
        (EMPTY, EMPTY),
    ],
)
def test_as_body(value, expected):
    assert as_body(value) == expected


def test_as_body_form():
    form = MultipartForm()
    assert as_body(form) == FormBody(form)


def test_empty_body():
    assert EMPTY.value == b""
    assert not EMPTY
    assert EmptyBody() == EMPTY


def test_multipart_form():
    form = MultipartForm()
    form.append_text("a", "1")
    form.append_file("f", "f.txt", b"data")
    form.append_text("a", "2")

    assert len(form) == 3
    assert list(form) == [
        TextField("a", "1"),
        FileField("f", "f.txt", b"data", "application/octet-stream"),
        TextField("a", "2"),
    ]
    assert form.fields == {"a": "2"}
    assert form.files == [FileField("f", "f.txt", b"data")]
    assert form.get("a") == TextField("a", "2")
    assert form.get("f").filename == "f.txt"
    assert form.get("missing") is None
