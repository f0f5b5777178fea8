"""Decompression of gzip-compressed artifacts."""

from __future__ import annotations

import gzip
import zlib
from typing import Union

_GZIP_WBITS = 16 + zlib.MAX_WBITS


def decompress_gzip(gz_contents: Union[bytes, bytearray, memoryview]) -> bytes:
    """Decompress a single gzip member and return its contents.

    Raises gzip.BadGzipFile (an OSError) for invalid or truncated input.
    """
    decompressor = zlib.decompressobj(_GZIP_WBITS)
    try:
        contents = decompressor.decompress(bytes(gz_contents))
        contents += decompressor.flush()
    except zlib.error as err:
        raise gzip.BadGzipFile(f"invalid gzip data: {err}") from err
    if not decompressor.eof:
        raise gzip.BadGzipFile("unexpected end of gzip stream")
    return contents