"""
The body of a decoded HTTP message and the multipart form model.

A body is always exactly one of the variants below. Use `as_body` at the edge
of the API to turn a plain Python value into a variant; everything else
pattern-matches on the variant classes:

>>> match body:
...     case EmptyBody():
...         ...
...     case RawBody(content):
...         ...

Every variant exposes the payload as `.value`.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import ClassVar


@dataclass(frozen=True)
class EmptyBody:
    """No body, or a body of zero length."""

    value: ClassVar[bytes] = b""

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class RawBody:
    """Uninterpreted body bytes."""

    value: bytes


@dataclass(frozen=True)
class TextBody:
    """A decoded text body."""

    value: str


@dataclass(frozen=True)
class JsonBody:
    """A parsed JSON value, or any value that is to be serialized as JSON."""

    value: Any


@dataclass(frozen=True)
class FormBody:
    """A multipart/form-data body."""

    value: "MultipartForm"


Body = EmptyBody | RawBody | TextBody | JsonBody | FormBody

EMPTY = EmptyBody()


@dataclass(frozen=True)
class TextField:
    name: str
    value: str


@dataclass(frozen=True)
class FileField:
    """
    A file part of a multipart form.

    `content` is either the file's bytes or an attachment handle. Handles are
    read through the `read_attachment` capability of the converter options when
    the form is encoded; the form itself never reads them.
    """

    name: str
    filename: str
    content: Any
    content_type: str = "application/octet-stream"


FormEntry = TextField | FileField


@dataclass
class MultipartForm:
    """
    An ordered collection of text fields and files, as sent by a browser `FormData`.

    Names may repeat; order is preserved for encoding.
    """

    entries: list[FormEntry] = field(default_factory=list)

    def append_text(self, name: str, value: str) -> None:
        self.entries.append(TextField(name, value))

    def append_file(
        self,
        name: str,
        filename: str,
        content: Any,
        content_type: str = "application/octet-stream",
    ) -> None:
        self.entries.append(FileField(name, filename, content, content_type))

    @property
    def fields(self) -> dict[str, str]:
        """Text fields by name. If a name repeats, the last value wins."""
        return {e.name: e.value for e in self.entries if isinstance(e, TextField)}

    @property
    def files(self) -> list[FileField]:
        return [e for e in self.entries if isinstance(e, FileField)]

    def get(self, name: str, default=None) -> FormEntry | None:
        """Returns the last entry with the given name."""
        for e in reversed(self.entries):
            if e.name == name:
                return e
        return default

    def __iter__(self) -> Iterator[FormEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def as_body(value: Any) -> Body:
    """
    Classify a plain Python value as a body variant.

    `None`, `b""` and `""` are empty, binary types are raw, `str` is text,
    a `MultipartForm` is a form, and everything else is treated as JSON.
    """
    match value:
        case EmptyBody() | RawBody() | TextBody() | JsonBody() | FormBody():
            return value
        case None | b"" | "":
            return EMPTY
        case bytes():
            return RawBody(value)
        case bytearray() | memoryview():
            return RawBody(bytes(value)) if len(value) else EMPTY
        case str():
            return TextBody(value)
        case MultipartForm():
            return FormBody(value)
        case _:
            return JsonBody(value)
