"""
Convert raw HTTP/1.1 messages to structured `Request`/`Response` objects and back.

>>> from httpbytes import decode_response
>>> res = decode_response(b'HTTP/1.1 200 OK\\r\\ncontent-type: application/json\\r\\n\\r\\n{"a": 1}')
>>> res.data.value
{'a': 1}

For repeated use, create a `HttpConverter` once and reuse it; the module-level
functions create a new converter per call.
"""

from collections.abc import Mapping
from typing import Any

from httpbytes.converter import HttpConverter
from httpbytes.exceptions import BodyTooLarge
from httpbytes.exceptions import ConversionError
from httpbytes.exceptions import InvalidHttpFormat
from httpbytes.exceptions import InvalidMultipart
from httpbytes.exceptions import InvalidRequestLine
from httpbytes.exceptions import InvalidStatusLine
from httpbytes.exceptions import InvalidUrl
from httpbytes.exceptions import UnsupportedMethod
from httpbytes.http import Request
from httpbytes.http import Response
from httpbytes.options import ConverterOptions
from httpbytes.types import EMPTY
from httpbytes.types import Body
from httpbytes.types import EmptyBody
from httpbytes.types import FileField
from httpbytes.types import FormBody
from httpbytes.types import JsonBody
from httpbytes.types import MultipartForm
from httpbytes.types import RawBody
from httpbytes.types import TextBody
from httpbytes.types import TextField
from httpbytes.types import as_body
from httpbytes.version import VERSION

Options = ConverterOptions | Mapping[str, Any] | None


def _converter(options: Options) -> HttpConverter:
    if options is None or isinstance(options, ConverterOptions):
        return HttpConverter(options)
    return HttpConverter(ConverterOptions.from_dict(options))


def decode_request(data: bytes, options: Options = None) -> Request:
    """Parse raw HTTP request bytes."""
    return _converter(options).decode_request(data)


async def encode_request(request: Request, options: Options = None) -> bytes:
    """Serialize a request to raw HTTP bytes."""
    return await _converter(options).encode_request(request)


def decode_response(data: bytes, options: Options = None) -> Response:
    """Parse raw HTTP response bytes."""
    return _converter(options).decode_response(data)


async def encode_response(response: Response, options: Options = None) -> bytes:
    """Serialize a response to raw HTTP bytes."""
    return await _converter(options).encode_response(response)


__all__ = [
    "VERSION",
    "HttpConverter",
    "ConverterOptions",
    "Request",
    "Response",
    "Body",
    "EMPTY",
    "EmptyBody",
    "RawBody",
    "TextBody",
    "JsonBody",
    "FormBody",
    "MultipartForm",
    "TextField",
    "FileField",
    "as_body",
    "ConversionError",
    "InvalidHttpFormat",
    "InvalidRequestLine",
    "InvalidStatusLine",
    "UnsupportedMethod",
    "BodyTooLarge",
    "InvalidMultipart",
    "InvalidUrl",
    "decode_request",
    "encode_request",
    "decode_response",
    "encode_response",
]
