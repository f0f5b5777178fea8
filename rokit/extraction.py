"""Find and extract the wanted executable from zip and tar archives."""

from __future__ import annotations

import io
import logging
import os
import sys
import tarfile
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Callable, Dict, Iterable, Optional, Tuple

from .descriptor import Descriptor

logger = logging.getLogger(__name__)

EXE_SUFFIX = ".exe" if sys.platform == "win32" else ""
EXE_EXTENSION = EXE_SUFFIX.lstrip(".")

ReadContents = Callable[[str], Optional[bytes]]

_READ_ERRORS = (
    KeyError,
    OSError,
    EOFError,
    RuntimeError,
    NotImplementedError,
    zlib.error,
    zipfile.BadZipFile,
    tarfile.TarError,
)


def _file_name(path: PurePosixPath) -> Optional[str]:
    name = path.name
    return None if name in ("", "..") else name


def _extension(file_name: Optional[str]) -> Optional[str]:
    if file_name is None:
        return None
    stem, dot, ext = file_name.rpartition(".")
    if not dot or not stem:
        return None
    return ext


def _ascii_lower(text: str) -> str:
    return "".join(char.lower() if char.isascii() else char for char in text)


@dataclass(frozen=True)
class Candidate:
    """An archive entry that might be the wanted file, and what matched."""

    path: str
    matched_full_path: bool = False
    matched_file_exact: bool = False
    matched_file_inexact: bool = False
    has_exec_perms: bool = False
    has_exec_suffix: bool = False
    has_descriptor: bool = False

    def priority(self) -> int:
        """Number of properties that matched; higher is better."""
        return sum(
            (
                self.matched_full_path,
                self.matched_file_exact,
                self.matched_file_inexact,
                self.has_exec_perms,
                self.has_exec_suffix,
                self.has_descriptor,
            )
        )


def find_best_candidate(
    entries: Iterable[Tuple[str, Optional[int]]],
    desired_file_path: str,
    read_file_contents: ReadContents,
) -> Optional[Candidate]:
    """Pick the entry most likely to be the desired file.

    ``entries`` holds (path, permission bits or None) pairs. Entries matching
    nothing are ignored; among equally good candidates the last one wins.
    """
    desired_path = PurePosixPath(desired_file_path)
    desired_name = _file_name(desired_path)
    if desired_name is None:
        return None
    desired_lower = _ascii_lower(desired_name)

    best: Optional[Candidate] = None
    for path, perms in entries:
        if path.endswith("/") or path.endswith(os.sep):
            continue
        pure = PurePosixPath(path)
        name = _file_name(pure)
        contents = read_file_contents(path)
        candidate = Candidate(
            path=path,
            matched_full_path=pure == desired_path,
            matched_file_exact=name == desired_name,
            matched_file_inexact=name is not None and _ascii_lower(name) == desired_lower,
            has_exec_perms=perms is not None and (perms & 0o111) != 0,
            has_exec_suffix=_extension(name) == EXE_EXTENSION,
            has_descriptor=contents is not None
            and Descriptor.detect_from_executable(contents) is not None,
        )
        if candidate.priority() == 0:
            continue
        if best is None or candidate.priority() >= best.priority():
            best = candidate

    if best is not None:
        logger.debug("found candidate %s", best.path)
    return best


def _lenient(reader: Callable[[str], bytes]) -> ReadContents:
    def read(path: str) -> Optional[bytes]:
        try:
            return reader(path)
        except _READ_ERRORS:
            return None

    return read


def _cached(reader: Callable[[str], bytes]) -> Callable[[str], bytes]:
    cache: Dict[str, bytes] = {}

    def read(path: str) -> bytes:
        if path not in cache:
            cache[path] = reader(path)
        return cache[path]

    return read


def _extract_best(
    entries: Iterable[Tuple[str, Optional[int]]],
    desired_file_name: str,
    reader: Callable[[str], bytes],
    kind: str,
) -> Optional[bytes]:
    read = _cached(reader)
    best = find_best_candidate(entries, f"{desired_file_name}{EXE_SUFFIX}", _lenient(read))
    found = None if best is None else read(best.path)
    logger.debug(
        "extracted %s file (found_any=%s, found_path=%s)",
        kind,
        found is not None,
        None if best is None else best.path,
    )
    return found


def extract_zip_file(zip_contents: bytes, desired_file_name: str) -> Optional[bytes]:
    """Return the contents of the best matching file in a zip archive, or None."""
    with zipfile.ZipFile(io.BytesIO(bytes(zip_contents))) as archive:
        entries = [(name, None) for name in archive.namelist()]
        return _extract_best(entries, desired_file_name, archive.read, "zip")


def extract_tar_file(tar_contents: bytes, desired_file_name: str) -> Optional[bytes]:
    """Return the contents of the best matching file in a tar archive, or None."""
    with tarfile.open(fileobj=io.BytesIO(bytes(tar_contents)), mode="r:") as archive:
        members: Dict[str, tarfile.TarInfo] = {}
        for member in archive.getmembers():
            if not member.isdir():
                members[member.name] = member

        ordered = sorted(members, key=lambda name: PurePosixPath(name).parts)
        entries = [(name, members[name].mode) for name in ordered]

        def read(path: str) -> bytes:
            member = members.get(path)
            if member is None:
                raise FileNotFoundError(f"File not found: {path}")
            handle = archive.extractfile(member)
            return b"" if handle is None else handle.read()

        return _extract_best(entries, desired_file_name, read, "tar")