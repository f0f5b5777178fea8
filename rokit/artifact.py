"""Releases and the downloadable artifacts they contain."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Tuple

from .artifact_format import ArtifactFormat
from .decompression import decompress_gzip
from .descriptor import Descriptor
from .errors import (
    FileMissingError,
    GenericExtractError,
    OSMismatchError,
    UnknownFormatError,
)
from .executable import os_from_executable
from .extraction import extract_tar_file, extract_zip_file
from .opsys import OS
from .provider import ArtifactProvider
from .sorting import compare_preferred_artifact, compare_preferred_formats

_BODY_PREVIEW = 128


def _tool_name(spec: Any) -> str:
    name = spec.name
    return str(name() if callable(name) else name)


def _preview_body(contents: bytes) -> str:
    if len(contents) > _BODY_PREVIEW + 6:
        head = contents[:_BODY_PREVIEW].decode("utf-8", "replace").strip()
        return f"{head} <...>"
    return contents.decode("utf-8", "replace")


@dataclass(frozen=True)
class Artifact:
    """An artifact to be downloaded and installed for a tool."""

    provider: ArtifactProvider
    format: Optional[ArtifactFormat]
    tool_spec: Any
    id: Optional[str] = None
    url: Optional[str] = None
    name: Optional[str] = None

    def extract_contents(self, contents: bytes) -> bytes:
        """Extract the tool's executable from the raw downloaded contents.

        Raises an ExtractError subclass if the format is unknown, the binary
        is missing, extraction fails, or the binary targets another OS.
        """
        if self.format is None:
            raise UnknownFormatError()
        fmt = self.format
        file_name = _tool_name(self.tool_spec)
        data = bytes(contents)

        tar_data = decompress_gzip(data) if fmt is ArtifactFormat.TAR_GZ else None
        try:
            if fmt is ArtifactFormat.ZIP:
                found = extract_zip_file(data, file_name)
            elif fmt is ArtifactFormat.TAR:
                found = extract_tar_file(data, file_name)
            elif fmt is ArtifactFormat.TAR_GZ:
                found = extract_tar_file(tar_data, file_name)
            else:
                found = decompress_gzip(data)
        except Exception as err:
            raise GenericExtractError(err, _preview_body(data)) from err

        archive_name = self.name or ""
        if found is None:
            raise FileMissingError(fmt, file_name, archive_name)

        current_os = OS.current_system()
        file_os = os_from_executable(found)
        if file_os is not None and file_os != current_os:
            raise OSMismatchError(current_os, file_os, file_name, archive_name)

        return found

    @classmethod
    def sort_by_system_compatibility(cls, artifacts: Iterable["Artifact"]) -> List["Artifact"]:
        """Return the artifacts compatible with this system, best first."""
        return cls._sorted_compatible(artifacts, allow_partial=False)

    @classmethod
    def find_partially_compatible_fallback(
        cls, artifacts: Iterable["Artifact"]
    ) -> Optional["Artifact"]:
        """Return the best artifact for this OS, even if its architecture differs.

        Its contents should be checked before use.
        """
        found = cls._sorted_compatible(artifacts, allow_partial=True)
        return found[0] if found else None

    @staticmethod
    def _sorted_compatible(
        artifacts: Iterable["Artifact"], allow_partial: bool
    ) -> List["Artifact"]:
        current = Descriptor.current_system()

        matches: List[Tuple[Descriptor, Artifact]] = []
        for artifact in artifacts:
            if artifact.name is None:
                continue
            described = Descriptor.detect(artifact.name)
            if described is None:
                continue
            fully = current.is_compatible_with(described)
            if fully or (allow_partial and current.os == described.os):
                matches.append((described, artifact))

        def compare(a: Tuple[Descriptor, Artifact], b: Tuple[Descriptor, Artifact]) -> int:
            return (
                current.sort_by_preferred_compat(a[0], b[0])
                or compare_preferred_artifact(a[1], b[1])
                or compare_preferred_formats(a[1], b[1])
            )

        matches.sort(key=functools.cmp_to_key(compare))
        return [artifact for _, artifact in matches]


@dataclass
class Release:
    """A release: its artifacts and, optionally, a changelog."""

    changelog: Optional[str] = None
    artifacts: List[Artifact] = field(default_factory=list)