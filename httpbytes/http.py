from dataclasses import dataclass
from dataclasses import field
from typing import Any

from httpbytes.types import Body
from httpbytes.types import EMPTY
from httpbytes.types import as_body


class Message:
    """Base class for `Request` and `Response`."""

    headers: dict[str, str]
    header_fields: list[tuple[str, str]]
    data: Body

    def __post_init__(self):
        self.data = as_body(self.data)
        self.headers = dict(self.headers)

    def get_all(self, name: str) -> list[str]:
        """
        All values of a header, in the order they were received.

        `headers` only keeps the last value of a repeated header. This is
        useful for Set-Cookie and Cookie headers, which can not be folded.
        """
        name = name.lower()
        if self.header_fields:
            return [v for k, v in self.header_fields if k.lower() == name]
        return [v for k, v in self.headers.items() if k.lower() == name]


@dataclass
class Request(Message):
    """
    An HTTP request.

    `data` accepts any plain value (bytes, str, a JSON-serializable object or a
    `MultipartForm`) and is stored as a body variant.
    """

    method: str = "get"
    url: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    data: Any = EMPTY
    header_fields: list[tuple[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """The axios-style request config shape."""
        return {
            "method": self.method,
            "url": self.url,
            "headers": self.headers,
            "data": self.data.value,
        }


@dataclass
class Response(Message):
    """
    An HTTP response.
    """

    status: int = 200
    status_text: str = "OK"
    headers: dict[str, str] = field(default_factory=dict)
    data: Any = EMPTY
    header_fields: list[tuple[str, str]] = field(default_factory=list)
    config: dict[str, Any] = field(default_factory=dict)
    request: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """The axios-style response shape."""
        return {
            "data": self.data.value,
            "status": self.status,
            "statusText": self.status_text,
            "headers": self.headers,
            "config": self.config,
            "request": self.request,
        }
