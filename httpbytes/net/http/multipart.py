from __future__ import annotations

import logging
import re
from collections.abc import Awaitable
from collections.abc import Callable
from typing import Any

from httpbytes import exceptions
from httpbytes.net.http import headers
from httpbytes.types import FileField
from httpbytes.types import MultipartForm
from httpbytes.types import TextField

logger = logging.getLogger(__name__)

AttachmentReader = Callable[[Any], Awaitable[bytes]]

_boundary_param = re.compile(r"boundary=([^;]+)", re.IGNORECASE)
_name_param = re.compile(r'\bname="([^"]+)"')
# An empty filename (a file input without a selected file) is still a file part.
_filename_param = re.compile(r'\bfilename="([^"]*)"')


def get_boundary(content_type: str) -> str:
    """
    Extract the boundary parameter from a multipart content-type value.

    Raises:
        InvalidMultipart, if there is no boundary.
    """
    m = _boundary_param.search(content_type)
    boundary = m.group(1).strip() if m else ""
    if len(boundary) >= 2 and boundary[0] == boundary[-1] == '"':
        boundary = boundary[1:-1]
    if not boundary:
        raise exceptions.InvalidMultipart(
            "No boundary found in multipart content type", details=repr(content_type)
        )
    return boundary


def decode_multipart(content: bytes, boundary: str) -> MultipartForm:
    """
    Takes a multipart/form-data body and its boundary and returns the form.

    Lines equal to ``--boundary`` start a part, ``--boundary--`` ends the body.
    Within a part the first empty line separates the part headers from the
    content. Parts without that separator or without a name are skipped.
    """
    delimiter = b"--" + boundary.encode("utf-8")
    close_delimiter = delimiter + b"--"

    parts: list[list[bytes]] = []
    current: list[bytes] | None = None
    for line in content.split(b"\r\n"):
        if line == delimiter or line == close_delimiter:
            if current is not None:
                parts.append(current)
            if line == close_delimiter:
                current = None
                break
            current = []
        elif current is not None:
            current.append(line)
    if current is not None:
        # unterminated body, keep what we have.
        parts.append(current)

    form = MultipartForm()
    for part in parts:
        try:
            sep = part.index(b"")
        except ValueError:
            logger.debug("Skipping multipart part without header separator.")
            continue
        part_headers = headers.fields_to_dict(
            headers.read_header_fields(
                line.decode("utf-8", "surrogateescape") for line in part[:sep]
            )
        )
        data = b"\r\n".join(part[sep + 1 :])

        disposition = part_headers.get("content-disposition", "")
        name = _name_param.search(disposition)
        if not name:
            logger.debug(f"Skipping multipart part without name: {disposition!r}")
            continue
        filename = _filename_param.search(disposition)
        if filename:
            form.entries.append(
                FileField(
                    name=name.group(1),
                    filename=filename.group(1),
                    content=data,
                    content_type=part_headers.get(
                        "content-type", "application/octet-stream"
                    ),
                )
            )
        else:
            form.entries.append(
                TextField(name.group(1), data.decode("utf-8", "surrogateescape"))
            )
    return form


async def read_file_content(
    entry: FileField, read_attachment: AttachmentReader | None
) -> bytes:
    content = entry.content
    if isinstance(content, (bytes, bytearray, memoryview)):
        return bytes(content)
    if read_attachment is None:
        raise TypeError(
            f"Cannot read attachment {entry.filename!r} of type {type(content).__name__}: "
            f"no read_attachment capability configured."
        )
    data = await read_attachment(content)
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(
            f"read_attachment must return bytes, but got {type(data).__name__}."
        )
    return bytes(data)


def _check_boundary_collision(value: bytes, boundary: bytes) -> None:
    if re.search(rb"^--%b(?:--)?\r?$" % re.escape(boundary), value, re.MULTILINE):
        raise exceptions.InvalidMultipart(
            "Boundary found in encoded content", details=repr(boundary.decode())
        )


async def encode_multipart(
    form: MultipartForm,
    boundary: str,
    read_attachment: AttachmentReader | None = None,
) -> bytes:
    """
    Serialize a form as a multipart/form-data body.

    File contents are read fully into memory first; handles that are not bytes
    are read with `read_attachment`.

    Raises:
        InvalidMultipart, if a part contains a delimiter line for `boundary`.
        TypeError, if a handle cannot be read.
    """
    b = boundary.encode("utf-8")
    chunks: list[bytes] = []
    for entry in form:
        match entry:
            case FileField(name=name, filename=filename, content_type=content_type):
                value = await read_file_content(entry, read_attachment)
                head = (
                    f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n'
                    f"Content-Type: {content_type or 'application/octet-stream'}\r\n"
                )
            case TextField(name=name, value=text):
                value = text.encode("utf-8", "surrogateescape")
                head = f'Content-Disposition: form-data; name="{name}"\r\n'
            case _:
                raise TypeError(
                    f"Form entries must be TextField or FileField, not {type(entry).__name__}."
                )
        _check_boundary_collision(value, b)
        chunks.append(b"--%b\r\n" % b)
        chunks.append(head.encode("utf-8", "surrogateescape"))
        chunks.append(b"\r\n")
        chunks.append(value)
        chunks.append(b"\r\n")
    chunks.append(b"--%b--\r\n" % b)
    return b"".join(chunks)
