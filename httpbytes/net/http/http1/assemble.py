import json
from collections.abc import Mapping

from httpbytes import exceptions
from httpbytes.net.http import multipart
from httpbytes.net.http.headers import has_header
from httpbytes.net.http.headers import is_valid_header_name
from httpbytes.net.http.http1.read import check_method
from httpbytes.net.http.http1.read import check_target
from httpbytes.types import Body
from httpbytes.types import EmptyBody
from httpbytes.types import FormBody
from httpbytes.types import JsonBody
from httpbytes.types import RawBody
from httpbytes.types import TextBody

# Headers we compute ourselves for multipart bodies.
_computed_headers = ("content-type", "content-length")


def _header_name(name: str, preserve_case: bool) -> str:
    return name if preserve_case else name.lower()


async def assemble_body(
    body: Body,
    boundary: str,
    read_attachment: multipart.AttachmentReader | None = None,
) -> tuple[bytes, str | None]:
    """
    Serialize a body.

    Returns:
        A (content, content_type) tuple. content_type is the type implied by the
        body (JSON or multipart), or None if the body does not imply one.
    """
    match body:
        case EmptyBody():
            return b"", None
        case RawBody(value=content):
            return content, None
        case TextBody(value=text):
            return text.encode("utf-8", "surrogateescape"), None
        case JsonBody(value=value):
            content = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
            return content.encode("utf-8", "surrogateescape"), "application/json"
        case FormBody(value=form):
            content = await multipart.encode_multipart(form, boundary, read_attachment)
            return content, f"multipart/form-data; boundary={boundary}"
        case _:
            raise TypeError(f"Unknown body type: {type(body).__name__}")


def assemble_headers(
    headers: Mapping[str, str],
    body: Body,
    content: bytes,
    content_type: str | None,
    preserve_case: bool = False,
    strict: bool = False,
) -> bytes:
    """
    Assemble the header block for a message, including the trailing empty line.

    Caller-supplied headers are emitted in insertion order. A content-type is
    added for JSON bodies that do not declare one, a content-length for every
    non-empty body that does not declare one. For multipart bodies, the
    caller's content-type and content-length are replaced by the computed ones.
    """
    is_form = isinstance(body, FormBody)
    lines = []
    for name, value in headers.items():
        value = str(value)
        if is_form and name.lower() in _computed_headers:
            continue
        if strict:
            if not is_valid_header_name(name):
                raise exceptions.InvalidHttpFormat(
                    "Invalid header name", details=repr(name)
                )
            if "\r" in value or "\n" in value:
                raise exceptions.InvalidHttpFormat(
                    "Invalid header value", details=f"{name}: {value!r}"
                )
        lines.append(f"{_header_name(name, preserve_case)}: {value}")

    if content_type and (is_form or not has_header(headers, "content-type")):
        lines.append(f"{_header_name('Content-Type', preserve_case)}: {content_type}")
    if content and (is_form or not has_header(headers, "content-length")):
        lines.append(f"{_header_name('Content-Length', preserve_case)}: {len(content)}")

    return "".join(f"{line}\r\n" for line in lines).encode(
        "utf-8", "surrogateescape"
    ) + b"\r\n"


def assemble_request_line(method: str | None, url: str | None, strict: bool = False) -> bytes:
    method = (method or "GET").upper()
    url = url or ""
    if strict:
        check_method(method)
        check_target(url)
    return f"{method} {url} HTTP/1.1\r\n".encode("utf-8", "surrogateescape")


def assemble_response_line(status: int, status_text: str) -> bytes:
    return f"HTTP/1.1 {int(status)} {status_text}\r\n".encode(
        "utf-8", "surrogateescape"
    )


def assemble_request_head(
    method: str | None,
    url: str | None,
    headers: Mapping[str, str],
    body: Body,
    content: bytes,
    content_type: str | None,
    preserve_case: bool = False,
    strict: bool = False,
) -> bytes:
    return assemble_request_line(method, url, strict) + assemble_headers(
        headers, body, content, content_type, preserve_case, strict
    )


def assemble_response_head(
    status: int,
    status_text: str,
    headers: Mapping[str, str],
    body: Body,
    content: bytes,
    content_type: str | None,
    preserve_case: bool = False,
    strict: bool = False,
) -> bytes:
    return assemble_response_line(status, status_text) + assemble_headers(
        headers, body, content, content_type, preserve_case, strict
    )
