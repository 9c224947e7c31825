"""
Conversion between raw HTTP/1.1 messages and `Request`/`Response` objects.
"""

import binascii
import dataclasses
import logging
import os

from httpbytes import exceptions
from httpbytes.http import Request
from httpbytes.http import Response
from httpbytes.net import encoding
from httpbytes.net.http import multipart
from httpbytes.net.http import transforms
from httpbytes.net.http.headers import fields_to_dict
from httpbytes.net.http.headers import get_header
from httpbytes.net.http.headers import read_header_fields
from httpbytes.net.http.http1 import assemble
from httpbytes.net.http.http1 import read
from httpbytes.options import ConverterOptions
from httpbytes.types import Body
from httpbytes.types import FormBody
from httpbytes.types import as_body
from httpbytes.utils.human import pretty_size

logger = logging.getLogger(__name__)


def generate_boundary() -> str:
    """
    Generate a random multipart boundary.

    See <https://datatracker.ietf.org/doc/html/rfc2046#section-5.1.1> for specifications
    on generating the boundary.
    """
    return "-" * 20 + binascii.hexlify(os.urandom(16)).decode()


class HttpConverter:
    """
    Converts raw HTTP/1.1 messages to `Request`/`Response` objects and back.

    A converter holds nothing but its options, so a single instance can be
    shared freely. If no multipart boundary is configured, one is generated
    here and used for every encoded form.
    """

    options: ConverterOptions

    def __init__(self, options: ConverterOptions | None = None, **kwargs):
        if options is None:
            options = ConverterOptions(**kwargs)
        elif kwargs:
            options = dataclasses.replace(options, **kwargs)
        if options.multipart_boundary is None:
            options = dataclasses.replace(
                options, multipart_boundary=generate_boundary()
            )
        self.options = options

    @property
    def boundary(self) -> str:
        assert self.options.multipart_boundary
        return self.options.multipart_boundary

    def _check_size(self, content: bytes) -> None:
        limit = self.options.max_body_size
        if limit is not None and len(content) > limit:
            raise exceptions.BodyTooLarge(
                "Body too large",
                details=f"{pretty_size(len(content))} exceeds the limit of {pretty_size(limit)}",
            )

    def _read_head(self, lines: list[str]) -> tuple[dict[str, str], list[tuple[str, str]]]:
        header_fields = read_header_fields(lines[1:])
        headers = fields_to_dict(header_fields, self.options.preserve_header_case)
        return headers, header_fields

    def decode_request(self, data: bytes) -> Request:
        """
        Parse a raw HTTP request.

        The method is lowercased, the target is kept verbatim. multipart/form-data
        bodies are decoded into a `MultipartForm`; all other bodies stay raw bytes.

        Raises:
            InvalidHttpFormat, InvalidRequestLine: malformed message.
            InvalidMultipart: multipart content-type without a boundary.
            BodyTooLarge: the body exceeds `max_body_size`.
        """
        lines, content = read.split_message(data, self.options.max_body_size)
        method, url = read.read_request_line(lines[0], self.options.strict)
        headers, header_fields = self._read_head(lines)

        body: Body = as_body(content)
        content_type = get_header(headers, "content-type", "")
        if "multipart/form-data" in content_type.lower():
            boundary = multipart.get_boundary(content_type)
            body = FormBody(multipart.decode_multipart(content, boundary))

        return Request(
            method=method.lower(),
            url=url,
            headers=headers,
            data=body,
            header_fields=header_fields,
        )

    def _decompress(
        self,
        content: bytes,
        headers: dict[str, str],
        header_fields: list[tuple[str, str]],
    ) -> bytes:
        ce = get_header(headers, "content-encoding")
        if not ce or not content:
            return content
        # content-encodings are listed in the order they were applied.
        encodings = [e.strip().lower() for e in ce.split(",") if e.strip()]
        unsupported = [e for e in encodings if e not in encoding.custom_decode]
        if unsupported:
            logger.warning(
                f"Unsupported Content-Encoding {', '.join(unsupported)}, keeping the body as-is."
            )
            return content
        try:
            decoded = content
            for enc in reversed(encodings):
                decoded = encoding.decode(decoded, enc, self.options.max_body_size)
        except exceptions.BodyTooLarge:
            raise
        except ValueError as e:
            logger.warning(f"Could not decode response body, keeping it as-is: {e}")
            return content

        for name in list(headers):
            if name.lower() == "content-encoding":
                del headers[name]
            elif name.lower() == "content-length":
                headers[name] = str(len(decoded))
        header_fields[:] = [
            (name, str(len(decoded)) if name.lower() == "content-length" else value)
            for name, value in header_fields
            if name.lower() != "content-encoding"
        ]
        return decoded

    def decode_response(self, data: bytes) -> Response:
        """
        Parse a raw HTTP response.

        The body is interpreted according to its content-type (see
        `httpbytes.net.http.transforms`), then passed through the configured
        response transforms.

        Raises:
            InvalidHttpFormat, InvalidStatusLine: malformed message.
            InvalidMultipart: multipart content-type without a boundary.
            BodyTooLarge: the body exceeds `max_body_size`.
        """
        lines, content = read.split_message(data, self.options.max_body_size)
        status, status_text = read.read_response_line(lines[0])
        headers, header_fields = self._read_head(lines)

        if self.options.decompress:
            content = self._decompress(content, headers, header_fields)

        body = transforms.transform_response_body(content, headers)
        logger.debug(f"Decoded {status} response body as {type(body).__name__}.")
        body = transforms.apply_transforms(
            body, headers, self.options.transform_response
        )

        return Response(
            status=status,
            status_text=status_text,
            headers=headers,
            data=body,
            header_fields=header_fields,
        )

    async def _assemble_body(self, body: Body) -> tuple[bytes, str | None]:
        content, content_type = await assemble.assemble_body(
            body, self.boundary, self.options.read_attachment
        )
        self._check_size(content)
        return content, content_type

    async def encode_request(self, request: Request) -> bytes:
        """
        Serialize a request to raw HTTP/1.1 bytes.

        This is a coroutine because file attachments of a form may need to be
        read through the `read_attachment` capability first.
        """
        body = as_body(request.data)
        content, content_type = await self._assemble_body(body)
        head = assemble.assemble_request_head(
            request.method,
            request.url,
            request.headers,
            body,
            content,
            content_type,
            self.options.preserve_header_case,
            self.options.strict,
        )
        return head + content

    async def encode_response(self, response: Response) -> bytes:
        """
        Serialize a response to raw HTTP/1.1 bytes.

        Form bodies are encoded as multipart/form-data, just like for requests.
        """
        body = as_body(response.data)
        content, content_type = await self._assemble_body(body)
        head = assemble.assemble_response_head(
            response.status,
            response.status_text,
            response.headers,
            body,
            content,
            content_type,
            self.options.preserve_header_case,
            self.options.strict,
        )
        return head + content


__all__ = ["HttpConverter", "generate_boundary"]
