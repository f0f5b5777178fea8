"""Descriptions of systems: operating system, architecture and toolchain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .arch import Arch
from .errors import RokitError
from .executable import parse_executable
from .opsys import OS
from .toolchain import Toolchain


class DescriptionParseError(RokitError, ValueError):
    """No operating system could be detected in a description."""

    def __init__(self) -> None:
        super().__init__("unknown OS, or no OS detected")


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _cmp_optional(a: Any, b: Any) -> int:
    # A missing value orders before any present value.
    if a is None or b is None:
        return _cmp(a is not None, b is not None)
    return _cmp(a, b)


@dataclass(frozen=True)
class Descriptor:
    """A system's OS, architecture and preferred toolchain."""

    os: OS
    arch: Optional[Arch] = None
    toolchain: Optional[Toolchain] = None

    @classmethod
    def current_system(cls) -> "Descriptor":
        """Return the description of the host system."""
        return cls(OS.current_system(), Arch.current_system(), Toolchain.current_system())

    @classmethod
    def detect(cls, search_string: str) -> Optional["Descriptor"]:
        """Detect a description from keywords; None if no OS was found."""
        os_kind = OS.detect(search_string)
        if os_kind is None:
            return None
        return cls(os_kind, Arch.detect(search_string), Toolchain.detect(search_string))

    @classmethod
    def detect_from_executable(cls, binary_contents: bytes) -> Optional["Descriptor"]:
        """Detect a description from the headers of an executable."""
        parsed = parse_executable(binary_contents)
        if parsed is None:
            return None
        os_kind, arch = parsed
        return cls(os_kind, arch, None)

    @classmethod
    def parse(cls, text: str) -> "Descriptor":
        """Parse a description, raising DescriptionParseError without an OS."""
        found = cls.detect(text)
        if found is None:
            raise DescriptionParseError()
        return found

    def is_compatible_with(self, other: "Descriptor") -> bool:
        """Whether binaries described by ``other`` run on this system.

        The OS must match; architectures must match too, except that 64-bit
        Windows and Linux run x86, and Apple Silicon macOS runs x64.
        """
        if self.os != other.os:
            return False
        if self.arch == other.arch:
            return True
        return (self.os, self.arch, other.arch) in {
            (OS.WINDOWS, Arch.X64, Arch.X86),
            (OS.LINUX, Arch.X64, Arch.X86),
            (OS.MACOS, Arch.ARM64, Arch.X64),
        }

    def sort_by_preferred_compat(self, a: "Descriptor", b: "Descriptor") -> int:
        """Compare two descriptions by preference relative to this one.

        Returns a negative number when ``a`` is preferred, positive when ``b``
        is, zero when neither is. Exact matches come first, then the preferred
        architecture and toolchain.
        """
        a_exact = a.os == self.os and a.arch == self.arch
        b_exact = b.os == self.os and b.arch == self.arch
        if a_exact != b_exact:
            return -1 if a_exact else 1
        if a.arch != b.arch:
            return _cmp_optional(a.arch, b.arch)
        if a.toolchain != b.toolchain:
            return _cmp_optional(a.toolchain, b.toolchain)
        return _cmp(a.os, b.os)