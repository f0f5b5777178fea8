"""System toolchains such as MSVC or GNU."""

from __future__ import annotations

import functools
import sys
import sysconfig
from enum import Enum
from typing import Optional


@functools.total_ordering
class Toolchain(Enum):
    """A system toolchain, such as MSVC or GNU."""

    MSVC = "msvc"
    GNU = "gnu"
    MUSL = "musl"

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        members = list(type(self))
        return members.index(self) < members.index(other)

    @classmethod
    def current_system(cls) -> Optional["Toolchain"]:
        """Return the toolchain of the running interpreter, if it has one."""
        if sys.platform == "win32":
            return cls.GNU if "GCC" in sys.version else cls.MSVC
        host = (sysconfig.get_config_var("HOST_GNU_TYPE") or "").lower()
        if "musl" in host:
            return cls.MUSL
        if "gnu" in host:
            return cls.GNU
        return None

    @classmethod
    def detect(cls, search_string: str) -> Optional["Toolchain"]:
        """Detect a toolchain from keywords in a search string."""
        lowercased = search_string.lower()
        for toolchain, keywords in _TOOLCHAIN_KEYWORDS:
            if any(keyword in lowercased for keyword in keywords):
                return toolchain
        return None

    def as_str(self) -> str:
        """Return the toolchain name, such as "msvc"."""
        return self.value


_TOOLCHAIN_KEYWORDS = (
    (Toolchain.MSVC, ("msvc",)),
    (Toolchain.GNU, ("gnu",)),
    (Toolchain.MUSL, ("musl",)),
)