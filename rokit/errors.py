"""Exceptions raised by the toolchain manager."""

from __future__ import annotations

from os import PathLike
from typing import Any, Union


def _display(value: Any) -> str:
    """Render enum-like values through their canonical string form."""
    as_str = getattr(value, "as_str", None)
    if callable(as_str):
        return str(as_str())
    return str(value)


class RokitError(Exception):
    """Base class for every error raised by this package."""


class HomeNotFoundError(RokitError):
    """The user's home directory could not be located."""

    def __init__(self) -> None:
        super().__init__("home directory not found")


class ManifestNotFoundError(RokitError):
    """A file that was expected to exist is missing."""

    def __init__(self, path: Union[str, "PathLike[str]"]) -> None:
        self.path = path
        super().__init__(f"file not found: {path}")


class ExtractError(RokitError):
    """Base class for failures while extracting an artifact."""


class UnknownFormatError(ExtractError):
    """The artifact has no recognised archive format."""

    def __init__(self) -> None:
        super().__init__("unknown format")


class FileMissingError(ExtractError):
    """The wanted binary was not found inside an archive."""

    def __init__(self, format: Any, file_name: str, archive_name: str) -> None:
        self.format = format
        self.file_name = file_name
        self.archive_name = archive_name
        super().__init__(
            f"missing binary '{file_name}' in {_display(format)} file '{archive_name}'"
        )


class OSMismatchError(ExtractError):
    """The extracted binary targets a different operating system."""

    def __init__(
        self, current_os: Any, file_os: Any, file_name: str, archive_name: str
    ) -> None:
        self.current_os = current_os
        self.file_os = file_os
        self.file_name = file_name
        self.archive_name = archive_name
        super().__init__(
            f"mismatch in OS for binary '{file_name}' in archive '{archive_name}'"
            f"\ncurrent OS is {_display(current_os)}, binary is {_display(file_os)}"
        )


class GenericExtractError(ExtractError):
    """Extraction failed; carries the leading bytes of the response body."""

    def __init__(self, source: BaseException, body: str) -> None:
        self.source = source
        self.body = body
        super().__init__(f"{source}\nresponse body first bytes:\n{body}")