"""
Utility functions for decoding response bodies.

Decoders produce their output in chunks of at most `CHUNK_SIZE` bytes, so that
`decode` can stop a decompression bomb as soon as it grows past the limit.
"""

import zlib
from collections.abc import Callable
from collections.abc import Iterator
from io import BytesIO

import brotli
import zstandard as zstd

from httpbytes import exceptions
from httpbytes.utils.human import pretty_size

CHUNK_SIZE = 64 * 1024
# Brotli's decompressor has no output limit, so we feed it small slices of input instead.
BROTLI_INPUT_SIZE = 1024


def decode(encoded: bytes, encoding: str, limit: int | None = None) -> bytes:
    """
    Decode the given content-encoded bytes.

    Returns:
        The decoded bytes

    Raises:
        ValueError, if the encoding is unknown or decoding fails.
        BodyTooLarge, if the decoded content exceeds `limit`.
    """
    if not isinstance(encoded, bytes):
        raise TypeError(f"Expected bytes, but got {type(encoded).__name__}.")
    encoding = encoding.lower()
    if encoding not in custom_decode:
        raise ValueError(f"Unsupported content-encoding: {encoding!r}")

    decoded = bytearray()
    try:
        for chunk in custom_decode[encoding](encoded):
            decoded += chunk
            if limit is not None and len(decoded) > limit:
                raise exceptions.BodyTooLarge(
                    "Body too large",
                    details=f"decoded {encoding} body exceeds the limit of {pretty_size(limit)}",
                )
    except exceptions.BodyTooLarge:
        raise
    except Exception as e:
        raise ValueError(
            "{} when decoding {} with {}: {}".format(
                type(e).__name__,
                repr(encoded)[:10],
                repr(encoding),
                repr(e),
            )
        )
    return bytes(decoded)


def identity(content: bytes) -> Iterator[bytes]:
    """
    Returns content unchanged. Identity is the default value of
    Accept-Encoding headers.
    """
    yield content


def _inflate(d, content: bytes) -> Iterator[bytes]:
    while content and not d.eof:
        yield d.decompress(content, CHUNK_SIZE)
        content = d.unconsumed_tail
    yield d.flush()
    if not d.eof:
        raise EOFError("Compressed file ended before the end-of-stream marker was reached")


def decode_gzip(content: bytes) -> Iterator[bytes]:
    while content:
        d = zlib.decompressobj(16 + zlib.MAX_WBITS)
        yield from _inflate(d, content)
        # concatenated members, trailing zero padding is ignored like gzip.GzipFile does.
        content = d.unused_data.lstrip(b"\x00")


def decode_brotli(content: bytes) -> Iterator[bytes]:
    if not content:
        return
    d = brotli.Decompressor()
    for i in range(0, len(content), BROTLI_INPUT_SIZE):
        yield d.process(content[i : i + BROTLI_INPUT_SIZE])
    if not d.is_finished():
        raise EOFError("Brotli stream ended before the end-of-stream marker was reached")


def decode_zstd(content: bytes) -> Iterator[bytes]:
    if not content:
        return
    zstd_ctx = zstd.ZstdDecompressor()
    reader = zstd_ctx.stream_reader(BytesIO(content), read_across_frames=True)
    while chunk := reader.read(CHUNK_SIZE):
        yield chunk


def decode_deflate(content: bytes) -> Iterator[bytes]:
    """
    Returns decompressed data for DEFLATE. Some servers may respond with
    compressed data without a zlib header or checksum. An undocumented
    feature of zlib permits the lenient decompression of data missing both
    values.

    http://bugs.python.org/issue5784
    """
    if not content:
        return
    d = zlib.decompressobj()
    try:
        # the zlib header is checked on the first call.
        first = d.decompress(content, CHUNK_SIZE)
    except zlib.error:
        yield from _inflate(zlib.decompressobj(-zlib.MAX_WBITS), content)
    else:
        yield first
        yield from _inflate(d, d.unconsumed_tail)


custom_decode: dict[str, Callable[[bytes], Iterator[bytes]]] = {
    "none": identity,
    "identity": identity,
    "gzip": decode_gzip,
    "x-gzip": decode_gzip,
    "deflate": decode_deflate,
    "br": decode_brotli,
    "zstd": decode_zstd,
}

__all__ = ["decode", "custom_decode"]
