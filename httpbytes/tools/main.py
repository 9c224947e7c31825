"""
The `httpbytes` command line tool.

    $ printf 'GET /users?page=1 HTTP/1.1\r\nHost: example.com\r\n\r\n' | httpbytes decode-request
    {
      "method": "get",
      "url": "/users?page=1",
      ...
"""

import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any
from typing import BinaryIO

from httpbytes import exceptions
from httpbytes.converter import HttpConverter
from httpbytes.http import Request
from httpbytes.http import Response
from httpbytes.options import ConverterOptions
from httpbytes.tools import cmdline
from httpbytes.types import Body
from httpbytes.types import EmptyBody
from httpbytes.types import FileField
from httpbytes.types import FormBody
from httpbytes.types import JsonBody
from httpbytes.types import RawBody
from httpbytes.types import TextBody
from httpbytes.types import TextField
from httpbytes.utils import strutils
from httpbytes.version import HTTPBYTES


def _bytes_state(content: bytes) -> Any:
    if strutils.is_mostly_bin(content):
        return {"bytes": strutils.bytes_to_escaped_str(content)}
    return {"bytes": strutils.bytes_to_escaped_str(content, keep_spacing=True)}


def body_to_state(body: Body) -> Any:
    """Convert a body to something `json.dumps` can handle."""
    match body:
        case EmptyBody():
            return None
        case RawBody(value=content):
            return _bytes_state(content)
        case TextBody(value=text) | JsonBody(value=text):
            return text
        case FormBody(value=form):
            entries = []
            for entry in form:
                match entry:
                    case TextField(name=name, value=value):
                        entries.append({"name": name, "value": value})
                    case FileField():
                        entries.append(
                            {
                                "name": entry.name,
                                "filename": entry.filename,
                                "content_type": entry.content_type,
                                "content": _bytes_state(bytes(entry.content)),
                            }
                        )
            return {"form": entries}
        case _:
            raise TypeError(f"Unknown body type: {type(body).__name__}")


def dump_message(message: Request | Response) -> str:
    state = message.to_dict()
    state["data"] = body_to_state(message.data)
    return json.dumps(state, indent=2, ensure_ascii=False)


def load_request(state: dict) -> Request:
    return Request(
        method=state.get("method") or "get",
        url=state.get("url") or "",
        headers=state.get("headers") or {},
        data=state.get("data"),
    )


def load_response(state: dict) -> Response:
    return Response(
        status=state.get("status", 200),
        status_text=state.get("statusText", state.get("status_text", "OK")),
        headers=state.get("headers") or {},
        data=state.get("data"),
    )


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


async def convert(
    converter: HttpConverter, command: str, content: bytes, out: BinaryIO
) -> None:
    if command == "decode-request":
        out.write(dump_message(converter.decode_request(content)).encode() + b"\n")
    elif command == "decode-response":
        out.write(dump_message(converter.decode_response(content)).encode() + b"\n")
    elif command == "encode-request":
        out.write(await converter.encode_request(load_request(json.loads(content))))
    elif command == "encode-response":
        out.write(await converter.encode_response(load_response(json.loads(content))))
    else:
        raise ValueError(f"Unknown command: {command}")


def httpbytes(args: Sequence[str] | None = None) -> int:
    parser = cmdline.httpbytes()
    opts = parser.parse_args(args)

    if opts.version:
        print(HTTPBYTES)
        return 0
    if not opts.command:
        parser.print_usage(sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if opts.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        options = ConverterOptions(
            max_body_size=opts.max_body_size,
            preserve_header_case=opts.preserve_header_case,
            multipart_boundary=opts.multipart_boundary,
            decompress=opts.decompress,
            strict=opts.strict,
        )
        content = _read_input(opts.path)
        asyncio.run(convert(HttpConverter(options), opts.command, content, sys.stdout.buffer))
    except exceptions.ConversionError as e:
        print(f"httpbytes: {e.code}: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"httpbytes: {e}", file=sys.stderr)
        return 1
    sys.stdout.buffer.flush()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(httpbytes())
