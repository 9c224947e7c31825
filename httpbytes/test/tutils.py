from httpbytes import http
from httpbytes.types import MultipartForm


def treq(**kwargs) -> http.Request:
    """
    Returns:
        httpbytes.http.Request
    """
    default = dict(
        method="get",
        url="/path",
        headers={"header": "qvalue"},
        data=b"content",
    )
    default.update(kwargs)
    return http.Request(**default)  # type: ignore


def tresp(**kwargs) -> http.Response:
    """
    Returns:
        httpbytes.http.Response
    """
    default = dict(
        status=200,
        status_text="OK",
        headers={"header-response": "svalue"},
        data=b"message",
    )
    default.update(kwargs)
    return http.Response(**default)  # type: ignore


def tform() -> MultipartForm:
    """
    Returns:
        A form with one text field and one file.
    """
    form = MultipartForm()
    form.append_text("username", "john")
    form.append_file("avatar", "avatar.png", b"\x89PNG\r\n\x1a\n\x00\xff", "image/png")
    return form


def raw_request(*lines: str, body: bytes = b"") -> bytes:
    """Join head lines with CRLF and append the empty line and the body."""
    return "".join(f"{line}\r\n" for line in lines).encode() + b"\r\n" + body


def raw_response(*lines: str, body: bytes = b"") -> bytes:
    return raw_request(*lines, body=body)
