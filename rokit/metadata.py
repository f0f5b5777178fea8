"""Version metadata stored at the end of link executables.

Layout, appended to the link's contents:

- serialized metadata
- metadata length (4 bytes, little endian)
- metadata format version (2 bytes, little endian)
- the trailer ``ROKIT_LINK`` (10 bytes)
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Optional, Tuple

TRAILER = b"ROKIT_LINK"
FORMAT_VERSION = 1
CURRENT_VERSION = "1.0.0"

_FOOTER_SIZE = 16
_MAX_VARINT_BYTES = 10


def _encode_varint(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _decode_varint(data: bytes) -> Optional[Tuple[int, int]]:
    """Return (value, bytes consumed), or None if malformed."""
    value = 0
    for index, byte in enumerate(data[:_MAX_VARINT_BYTES]):
        value |= (byte & 0x7F) << (7 * index)
        if not byte & 0x80:
            return value, index + 1
    return None


@dataclass(frozen=True)
class LinkMetadata:
    """Metadata describing which version wrote a link executable."""

    version: str

    @classmethod
    def current(cls) -> "LinkMetadata":
        """Return metadata for the running version."""
        return cls(CURRENT_VERSION)

    def is_current(self) -> bool:
        """Whether this metadata was written by the running version."""
        return self.version == CURRENT_VERSION

    @classmethod
    def parse_from(cls, contents: bytes) -> Optional["LinkMetadata"]:
        """Read metadata from the end of a file's contents, if present."""
        data = bytes(contents)
        size = len(data)
        if size < _FOOTER_SIZE or not data.endswith(TRAILER):
            return None
        meta_len, meta_version = struct.unpack_from("<IH", data, size - _FOOTER_SIZE)
        if size < _FOOTER_SIZE + meta_len or meta_version != FORMAT_VERSION:
            return None
        payload = data[size - _FOOTER_SIZE - meta_len : size - _FOOTER_SIZE]
        return cls._deserialize(payload)

    @classmethod
    def _deserialize(cls, payload: bytes) -> Optional["LinkMetadata"]:
        decoded = _decode_varint(payload)
        if decoded is None:
            return None
        length, offset = decoded
        raw = payload[offset : offset + length]
        if len(raw) != length:
            return None
        try:
            return cls(raw.decode("utf-8"))
        except UnicodeDecodeError:
            return None

    def _serialize(self) -> bytes:
        encoded = self.version.encode("utf-8")
        return _encode_varint(len(encoded)) + encoded

    def append_to(self, contents: bytes) -> bytes:
        """Return the contents with this metadata appended."""
        payload = self._serialize()
        if len(payload) > 0xFFFFFFFF:
            raise ValueError("metadata larger than 4GB is not supported")
        return (
            bytes(contents)
            + payload
            + struct.pack("<IH", len(payload), FORMAT_VERSION)
            + TRAILER
        )