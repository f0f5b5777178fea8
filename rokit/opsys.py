"""Operating systems, and detecting them from names."""

from __future__ import annotations

import functools
import sys
from enum import Enum
from typing import List, Optional


def is_word_separator(char: str) -> bool:
    """Return whether a character separates words in an artifact name."""
    return char in "-_" or char.isspace()


def _words(text: str) -> List[str]:
    return "".join(" " if is_word_separator(c) else c for c in text).split()


@functools.total_ordering
class OS(Enum):
    """An operating system, such as Windows or Linux."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        members = list(type(self))
        return members.index(self) < members.index(other)

    @classmethod
    def current_system(cls) -> "OS":
        """Return the operating system of the host."""
        platform = sys.platform
        if platform == "win32":
            return cls.WINDOWS
        if platform == "darwin":
            return cls.MACOS
        if platform.startswith("linux"):
            return cls.LINUX
        raise RuntimeError("Unsupported OS")

    @classmethod
    def detect(cls, search_string: str) -> Optional["OS"]:
        """Detect an operating system from keywords in a search string."""
        lowercased = search_string.lower()

        # Substring matches are more precise and take priority over words.
        for os_kind, keywords in _OS_SUBSTRINGS:
            if any(keyword in lowercased for keyword in keywords):
                return os_kind

        for word in _words(lowercased):
            for os_kind, keywords in _OS_FULL_WORDS:
                if word in keywords:
                    return os_kind

        return None

    def as_str(self) -> str:
        """Return the operating system name, such as "windows"."""
        return self.value


# Partial matches, e.g. "wordwin64" would still match.
_OS_SUBSTRINGS = (
    (OS.WINDOWS, ("windows",)),
    (OS.MACOS, ("macos", "darwin", "apple")),
    (OS.LINUX, ("linux", "ubuntu", "debian", "fedora")),
)

# Whole-word matches; these must not contain word separators.
_OS_FULL_WORDS = (
    (OS.WINDOWS, ("win", "win32", "win64")),
    (OS.MACOS, ("mac", "osx")),
    (OS.LINUX, ()),
)