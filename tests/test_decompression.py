import gzip
import os

import pytest

from rokit.decompression import decompress_gzip


def test_round_trip_text():
    original = b"hello, gzip world\n" * 10
    assert decompress_gzip(gzip.compress(original)) == original


def test_round_trip_binary():
    original = os.urandom(200_000)
    assert decompress_gzip(gzip.compress(original)) == original


def test_round_trip_empty_payload():
    assert decompress_gzip(gzip.compress(b"")) == b""


def test_accepts_bytearray_and_memoryview():
    original = b"some executable bytes"
    compressed = gzip.compress(original)
    assert decompress_gzip(bytearray(compressed)) == original
    assert decompress_gzip(memoryview(compressed)) == original


def test_invalid_data_raises():
    with pytest.raises(OSError):
        decompress_gzip(b"this is not gzip data at all")


def test_truncated_data_raises():
    compressed = gzip.compress(b"abcdefgh" * 1000)
    with pytest.raises(OSError, match="unexpected end"):
        decompress_gzip(compressed[: len(compressed) // 2])