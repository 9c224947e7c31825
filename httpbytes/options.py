import typing
from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import fields
from typing import Any

from httpbytes.utils import typecheck

# camelCase names of the JavaScript-style configuration surface.
_aliases = {
    "maxBodySize": "max_body_size",
    "preserveHeaderCase": "preserve_header_case",
    "multipartBoundary": "multipart_boundary",
    "transformResponse": "transform_response",
    "readAttachment": "read_attachment",
}


@dataclass(frozen=True)
class ConverterOptions:
    """
    Configuration of a `HttpConverter`. Options are fixed for the lifetime of a converter.
    """

    max_body_size: int | None = None
    """Maximum body size in bytes. `None` means unbounded."""
    preserve_header_case: bool = False
    """Keep the case of header names instead of lowercasing them."""
    multipart_boundary: str | None = None
    """Boundary for encoded multipart bodies. Generated once per converter if unset."""
    transform_response: Sequence[Callable] = ()
    """Functions `(value, headers) -> value` applied to decoded response bodies, in order."""
    decompress: bool = True
    """Undo gzip, deflate, br and zstd content-encodings when decoding responses."""
    strict: bool = False
    """Reject unknown methods, malformed targets and malformed header names."""
    read_attachment: Callable[[Any], Awaitable[bytes]] | None = None
    """Reads a file attachment that is not already bytes."""

    def __post_init__(self):
        hints = typing.get_type_hints(type(self))
        for field in fields(self):
            typecheck.check_option_type(
                field.name, getattr(self, field.name), hints[field.name]
            )
        if self.max_body_size is not None and self.max_body_size < 0:
            raise ValueError(f"max_body_size must not be negative: {self.max_body_size}")
        if self.multipart_boundary is not None and not (
            0 < len(self.multipart_boundary) <= 70
        ):
            # https://datatracker.ietf.org/doc/html/rfc2046#section-5.1.1
            raise ValueError(
                f"multipart_boundary must be 1 to 70 characters long: {self.multipart_boundary!r}"
            )
        # freeze the sequence, so that the options stay immutable.
        object.__setattr__(self, "transform_response", tuple(self.transform_response))

    @classmethod
    def from_dict(cls, options: typing.Mapping[str, Any]) -> "ConverterOptions":
        """
        Create options from a mapping. Accepts both the Python names and the
        camelCase names (`maxBodySize`, `preserveHeaderCase`, ...).
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in options.items():
            name = _aliases.get(key, key)
            if name not in known:
                raise TypeError(f"Unknown converter option: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)
