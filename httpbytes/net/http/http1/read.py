import re

from httpbytes import exceptions
from httpbytes.utils.human import pretty_size
from httpbytes.utils.strutils import bytes_to_escaped_str

# Methods accepted in strict mode, https://www.iana.org/assignments/http-methods
KNOWN_METHODS = frozenset(
    ["GET", "HEAD", "POST", "PUT", "DELETE", "CONNECT", "OPTIONS", "TRACE", "PATCH"]
)

_valid_http_version = re.compile(r"^HTTP/\d(?:\.\d)?$")
_invalid_target_chars = re.compile(r"[\x00-\x20\x7f]")
# The reason phrase is everything after the single space following the code.
# It may contain spaces and punctuation, start with a space, or be empty; all
# of these survive a decode and encode cycle unchanged.
_response_line = re.compile(
    r"^(?P<version>HTTP/\d(?:\.\d)?)[ \t]+(?P<code>\d+) (?P<reason>.*)$"
)


def _native(x: bytes) -> str:
    # While the head _should_ be ASCII, it's not uncommon for header values to be utf-8 encoded.
    return x.decode("utf-8", "surrogateescape")


def split_message(
    data: bytes, max_body_size: int | None = None
) -> tuple[list[str], bytes]:
    """
    Split a complete HTTP message into its head lines and its body.

    The head is everything up to the first empty line (CRLF CRLF), the body
    everything after it. A message without an empty line has no body.

    Raises:
        InvalidHttpFormat, if the message does not even have a line break.
        BodyTooLarge, if the body exceeds `max_body_size`. This is checked
        before the body is copied out of `data`.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"Expected bytes, but got {type(data).__name__}.")
    data = bytes(data)
    if b"\r\n" not in data:
        raise exceptions.InvalidHttpFormat(
            "Invalid HTTP message format",
            details=f"no line break in {bytes_to_escaped_str(data[:50])!r}",
        )

    idx = data.find(b"\r\n\r\n")
    if idx == -1:
        head, body_start = data, len(data)
    else:
        head, body_start = data[:idx], idx + 4

    body_size = len(data) - body_start
    if max_body_size is not None and body_size > max_body_size:
        raise exceptions.BodyTooLarge(
            "Body too large",
            details=f"{pretty_size(body_size)} exceeds the limit of {pretty_size(max_body_size)}",
        )

    return _native(head).split("\r\n"), data[body_start:]


def check_method(method: str) -> None:
    if method.upper() not in KNOWN_METHODS:
        raise exceptions.UnsupportedMethod(
            "Unsupported HTTP method", details=repr(method)
        )


def check_target(target: str) -> None:
    if not target or _invalid_target_chars.search(target):
        raise exceptions.InvalidUrl("Invalid request target", details=repr(target))


def read_request_line(line: str, strict: bool = False) -> tuple[str, str]:
    """
    Parse a request line into its method and target.

    The target is returned verbatim, including query string and fragment.

    Raises:
        InvalidRequestLine, if the line has less than three tokens.
        UnsupportedMethod, InvalidUrl: in strict mode only.
    """
    parts = line.split()
    if len(parts) < 3 or (strict and len(parts) != 3):
        raise exceptions.InvalidRequestLine("Invalid request line", details=repr(line))
    method, target, http_version = parts[0], parts[1], parts[-1]
    if strict:
        if not _valid_http_version.match(http_version):
            raise exceptions.InvalidRequestLine(
                "Unknown HTTP version", details=repr(http_version)
            )
        check_method(method)
        check_target(target)
    return method, target


def read_response_line(line: str) -> tuple[int, str]:
    """
    Parse a status line into its status code and reason phrase.

    Raises:
        InvalidStatusLine, if the protocol token, the numeric code or the
        separator before the reason phrase is missing.
    """
    m = _response_line.match(line)
    if not m:
        raise exceptions.InvalidStatusLine("Invalid status line", details=repr(line))
    return int(m.group("code")), m.group("reason")
