"""
Content-type driven interpretation of response bodies.

This mirrors what HTTP clients do by default: JSON is parsed, text-like
content is decoded, multipart forms are split into fields and files. Nothing
in here raises for bad content; undecodable bodies stay raw.
"""

import codecs
import json
import logging
import re
from collections.abc import Callable
from collections.abc import Mapping
from collections.abc import Sequence
from typing import Any

from httpbytes.net.http import multipart
from httpbytes.net.http.headers import get_header
from httpbytes.net.http.headers import parse_content_type
from httpbytes.types import Body
from httpbytes.types import EMPTY
from httpbytes.types import FormBody
from httpbytes.types import JsonBody
from httpbytes.types import RawBody
from httpbytes.types import TextBody
from httpbytes.types import as_body

logger = logging.getLogger(__name__)

ResponseTransform = Callable[[Any, Mapping[str, str]], Any]

_json_type = re.compile(r"^application/(?:[\w.\-]+\+)?json$")


def _charset(content_type: str) -> str:
    ct = parse_content_type(content_type)
    if ct and (charset := ct[2].get("charset")):
        charset = charset.strip("\"'")
        try:
            codec = codecs.lookup(charset)
        except LookupError:
            logger.debug(f"Unknown charset {charset!r}, falling back to utf-8.")
        else:
            # bytes.decode refuses bytes-to-bytes codecs such as base64 or rot13.
            if codec._is_text_encoding:
                return codec.name
            logger.debug(f"{charset!r} is not a text encoding, falling back to utf-8.")
    return "utf-8"


def _mimetype(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


def decode_json(content: bytes) -> Body:
    try:
        return JsonBody(json.loads(content))
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors.
        logger.debug(f"Invalid JSON body, keeping raw bytes: {e}")
        return RawBody(content)


def decode_text(content: bytes, content_type: str) -> Body:
    return TextBody(content.decode(_charset(content_type), "surrogateescape"))


def try_decode_text(content: bytes, content_type: str) -> Body:
    try:
        return TextBody(content.decode(_charset(content_type)))
    except UnicodeDecodeError:
        return RawBody(content)


def transform_response_body(content: bytes, headers: Mapping[str, str]) -> Body:
    """
    Interpret a response body according to its content-type header.

    | content-type                        | result                         |
    |-------------------------------------|--------------------------------|
    | application/json, application/*+json| JSON, raw bytes if invalid     |
    | text/*, form-urlencoded, xml        | text                           |
    | multipart/form-data                 | form                           |
    | anything else                       | text if valid, raw bytes else  |

    Raises:
        InvalidMultipart, if a multipart body declares no boundary.
    """
    if not content:
        return EMPTY

    content_type = get_header(headers, "content-type", "")
    mimetype = _mimetype(content_type)

    if _json_type.match(mimetype):
        return decode_json(content)
    elif mimetype == "multipart/form-data":
        boundary = multipart.get_boundary(content_type)
        return FormBody(multipart.decode_multipart(content, boundary))
    elif mimetype.startswith("text/") or mimetype in (
        "application/x-www-form-urlencoded",
        "application/xml",
    ):
        return decode_text(content, content_type)
    else:
        # application/octet-stream, images, unknown types: text if it is valid
        return try_decode_text(content, content_type)


def apply_transforms(
    body: Body,
    headers: Mapping[str, str],
    transforms: Sequence[ResponseTransform],
) -> Body:
    """
    Run custom transforms in order. Each one receives the current body value and
    the headers and returns the replacement value. A transform that raises is
    logged and skipped; the body from before it is kept.
    """
    for transform in transforms:
        try:
            body = as_body(transform(body.value, headers))
        except Exception:
            logger.warning(
                f"Response transform {getattr(transform, '__name__', transform)!r} failed, "
                f"keeping previous body.",
                exc_info=True,
            )
    return body


__all__ = [
    "ResponseTransform",
    "transform_response_body",
    "apply_transforms",
]
