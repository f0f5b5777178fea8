"""Archive formats of downloadable artifacts, and splitting their file names."""

from __future__ import annotations

import functools
from enum import Enum
from typing import Iterable, List, Optional, Tuple

_ALLOWED_EXTENSION_NAMES = ("zip", "tar", "gz", "tgz")
_ALLOWED_EXTENSION_COUNT = 2


def _split_last_extension(path: str) -> Optional[Tuple[str, str]]:
    """Split the final component of a path into (stem, extension)."""
    file_name = path.rstrip("/").rsplit("/", 1)[-1]
    if not file_name or file_name == "..":
        return None
    before, separator, after = file_name.rpartition(".")
    if not separator or not before:
        return None
    return before, after


def split_filename_and_extensions(name: str) -> Tuple[str, List[str]]:
    """Split a file name into its base name and up to two archive extensions.

    Only archive extensions (zip, tar, gz, tgz) are split off; the rest of
    the name is left as it is.
    """
    current = name
    extensions: List[str] = []
    while True:
        split = _split_last_extension(current)
        if split is None:
            break
        stem, extension = split
        if extension.lower() not in _ALLOWED_EXTENSION_NAMES:
            break
        extensions.append(extension)
        current = stem
        if len(extensions) >= _ALLOWED_EXTENSION_COUNT:
            break
    extensions.reverse()
    return current, extensions


@functools.total_ordering
class ArtifactFormat(Enum):
    """An artifact format; declaration order is the order of preference."""

    TAR_GZ = "tar.gz"
    TAR = "tar"
    ZIP = "zip"
    GZ = "gz"

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        members = list(type(self))
        return members.index(self) < members.index(other)

    @classmethod
    def from_extensions(cls, extensions: Iterable[str]) -> Optional["ArtifactFormat"]:
        """Return the format named by a list of file extensions, if any."""
        exts = [ext.lower() for ext in extensions]
        if not exts:
            return None
        last = exts[-1]
        if last == "zip":
            return cls.ZIP
        if last == "tar":
            return cls.TAR
        if last == "tgz":
            return cls.TAR_GZ
        if len(exts) >= 2 and exts[-2] == "tar" and last == "gz":
            return cls.TAR_GZ
        if last == "gz":
            return cls.GZ
        return None

    @classmethod
    def from_path_or_url(cls, path_or_url: str) -> Optional["ArtifactFormat"]:
        """Return the format of a file path or URL, judged by its extensions."""
        _, extensions = split_filename_and_extensions(path_or_url)
        return cls.from_extensions(extensions)

    @classmethod
    def parse(cls, text: str) -> "ArtifactFormat":
        """Parse a format name such as "zip", "tar", "tar.gz" or "tgz"."""
        lowered = text.strip().lower()
        if lowered == "zip":
            return cls.ZIP
        if lowered == "tar":
            return cls.TAR
        if lowered in ("tar.gz", "tgz"):
            return cls.TAR_GZ
        raise ValueError(f"unknown artifact format '{lowered}'")

    def as_str(self) -> str:
        """Return the format name, such as "tar.gz"."""
        return self.value

    def __str__(self) -> str:
        return self.as_str()