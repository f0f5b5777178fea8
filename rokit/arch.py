"""System architectures, and detecting them from names."""

from __future__ import annotations

import functools
import platform
from enum import Enum
from typing import List, Optional

from .opsys import OS, is_word_separator


def _words(text: str) -> List[str]:
    return "".join(" " if is_word_separator(c) else c for c in text).split()


@functools.total_ordering
class Arch(Enum):
    """A system architecture, such as x86-64 or ARM.

    Declaration order matters: native ARM binaries sort ahead of x86 ones,
    which would most likely run under emulation.
    """

    ARM64 = "arm64"
    X64 = "x64"
    ARM32 = "arm32"
    X86 = "x86"

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        members = list(type(self))
        return members.index(self) < members.index(other)

    @classmethod
    def current_system(cls) -> "Arch":
        """Return the architecture of the host."""
        machine = platform.machine().lower()
        if machine in ("aarch64", "arm64"):
            return cls.ARM64
        if machine in ("x86_64", "amd64", "x64"):
            return cls.X64
        if machine in ("x86", "i386", "i486", "i586", "i686"):
            return cls.X86
        if machine.startswith("arm"):
            return cls.ARM32
        raise RuntimeError("Unsupported architecture")

    @classmethod
    def detect(cls, search_string: str) -> Optional["Arch"]:
        """Detect an architecture from keywords in a search string."""
        lowercased = search_string.lower()

        # Substring matches are longer and less likely to be false positives.
        for arch, keywords in _ARCH_SUBSTRINGS:
            if any(keyword in lowercased for keyword in keywords):
                return arch

        for word in _words(lowercased):
            for arch, keywords in _ARCH_FULL_WORDS:
                if word in keywords:
                    return arch

        # A macOS universal binary runs on both x64 and arm64; report x64,
        # which passes compatibility checks on either system.
        if "universal" in lowercased and OS.detect(lowercased) is OS.MACOS:
            return cls.X64

        return None

    def as_str(self) -> str:
        """Return the architecture name, such as "x64"."""
        return self.value


# Partial matches, e.g. "wordwin64" would still match as x64.
_ARCH_SUBSTRINGS = (
    (Arch.ARM64, ("aarch64", "arm64", "armv9")),
    (Arch.X64, ("x86-64", "x86_64", "amd64", "win64", "win-x64")),
    (Arch.ARM32, ("arm32", "armv7")),
    (Arch.X86, ("i686", "i386", "win32", "win-x86")),
)

# Whole-word matches; these must not contain word separators.
_ARCH_FULL_WORDS = (
    (Arch.ARM64, ()),
    (Arch.X64, ("x64", "win")),
    (Arch.ARM32, ("arm",)),
    (Arch.X86, ("x86",)),
)