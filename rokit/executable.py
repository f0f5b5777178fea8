"""Detect the target OS and architecture of an executable from its headers.

ELF, Mach-O (thin and fat) and PE files are recognised.
"""

from __future__ import annotations

import struct
from typing import Callable, Iterable, Optional, Tuple

from .arch import Arch
from .opsys import OS

Parsed = Optional[Tuple[OS, Arch]]

# ELF machine types
_ELF_MACHINES = {
    183: Arch.ARM64,  # EM_AARCH64
    62: Arch.X64,  # EM_X86_64
    3: Arch.X86,  # EM_386
    40: Arch.ARM32,  # EM_ARM
}

# Mach-O CPU types
_CPU_ARCH_ABI64 = 0x01000000
_CPU_ARCH_ABI64_32 = 0x02000000
_CPU_TYPE_X86 = 7
_CPU_TYPE_ARM = 12
_MACH_CPU_TYPES = {
    _CPU_TYPE_ARM | _CPU_ARCH_ABI64: Arch.ARM64,
    _CPU_TYPE_X86 | _CPU_ARCH_ABI64: Arch.X64,
    _CPU_TYPE_ARM | _CPU_ARCH_ABI64_32: Arch.ARM32,
    _CPU_TYPE_ARM: Arch.ARM32,
    _CPU_TYPE_X86: Arch.X86,
}
_MH_MAGIC = 0xFEEDFACE
_MH_MAGIC_64 = 0xFEEDFACF
_FAT_MAGIC = 0xCAFEBABE
_FAT_ARCH_SIZE = 20

# PE / COFF machine types
_COFF_MACHINES = {
    0xAA64: Arch.ARM64,
    0x8664: Arch.X64,
    0x01C0: Arch.ARM32,
    0x01C4: Arch.ARM32,
    0x014C: Arch.X86,
}


def _parse_elf(data: bytes) -> Parsed:
    if len(data) < 16 or data[:4] != b"\x7fELF":
        return None
    header_size = {1: 52, 2: 64}.get(data[4])
    byte_order = {1: "<", 2: ">"}.get(data[5])
    if header_size is None or byte_order is None or len(data) < header_size:
        return None
    (machine,) = struct.unpack_from(byte_order + "H", data, 18)
    arch = _ELF_MACHINES.get(machine)
    return None if arch is None else (OS.LINUX, arch)


def _parse_mach(data: bytes) -> Parsed:
    if len(data) < 8:
        return None

    (big_magic,) = struct.unpack_from(">I", data, 0)
    if big_magic == _FAT_MAGIC:
        (count,) = struct.unpack_from(">I", data, 4)
        if len(data) < 8 + count * _FAT_ARCH_SIZE:
            return None
        arches = [
            arch
            for arch in (
                _MACH_CPU_TYPES.get(
                    struct.unpack_from(">I", data, 8 + i * _FAT_ARCH_SIZE)[0]
                )
                for i in range(count)
            )
            if arch is not None
        ]
        # Universal binaries with several known architectures are not
        # represented by a single Arch value.
        return (OS.MACOS, arches[0]) if len(arches) == 1 else None

    for byte_order in ("<", ">"):
        (magic,) = struct.unpack_from(byte_order + "I", data, 0)
        header_size = {_MH_MAGIC: 28, _MH_MAGIC_64: 32}.get(magic)
        if header_size is None:
            continue
        if len(data) < header_size:
            return None
        (cputype,) = struct.unpack_from(byte_order + "I", data, 4)
        arch = _MACH_CPU_TYPES.get(cputype)
        return None if arch is None else (OS.MACOS, arch)
    return None


def _parse_pe(data: bytes) -> Parsed:
    if len(data) < 0x40 or data[:2] != b"MZ":
        return None
    (pe_offset,) = struct.unpack_from("<I", data, 0x3C)
    # Signature (4 bytes) followed by a 20-byte COFF header.
    if len(data) < pe_offset + 24 or data[pe_offset : pe_offset + 4] != b"PE\0\0":
        return None
    (machine,) = struct.unpack_from("<H", data, pe_offset + 4)
    arch = _COFF_MACHINES.get(machine)
    return None if arch is None else (OS.WINDOWS, arch)


def _parsers_for_host() -> Iterable[Callable[[bytes], Parsed]]:
    # Try the host's native format first, as it is the most likely match.
    try:
        host = OS.current_system()
    except RuntimeError:
        host = OS.LINUX
    if host is OS.MACOS:
        return (_parse_mach, _parse_elf, _parse_pe)
    if host is OS.WINDOWS:
        return (_parse_pe, _parse_elf, _parse_mach)
    return (_parse_elf, _parse_mach, _parse_pe)


def parse_executable(binary_contents: bytes) -> Parsed:
    """Return the (OS, Arch) an executable was built for, or None."""
    data = bytes(binary_contents)
    for parser in _parsers_for_host():
        result = parser(data)
        if result is not None:
            return result
    return None


def os_from_executable(binary_contents: bytes) -> Optional[OS]:
    """Return the operating system an executable targets, or None."""
    parsed = parse_executable(binary_contents)
    return None if parsed is None else parsed[0]


def arch_from_executable(binary_contents: bytes) -> Optional[Arch]:
    """Return the architecture an executable targets, or None."""
    parsed = parse_executable(binary_contents)
    return None if parsed is None else parsed[1]