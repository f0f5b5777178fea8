"""The authentication manifest: tokens for artifact providers."""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path
from typing import Dict, List, Optional, Union

import tomlkit
from tomlkit import TOMLDocument

from .errors import ManifestNotFoundError
from .provider import ArtifactProvider

logger = logging.getLogger(__name__)

MANIFEST_FILE_NAME = "auth.toml"
REPOSITORY_URL = "https://example.com/rokit"

DEFAULT_CONTENTS = """
# This file lists authentication tokens managed by Rokit, a toolchain manager for Roblox projects.
# For more information, see <|REPOSITORY_URL|>

# github = "token"
"""

_PathLike = Union[str, "PathLike[str]"]


def _leading_indent(line: str) -> Optional[int]:
    """Count leading spaces and tabs; None for whitespace-only lines."""
    stripped = line.lstrip(" \t")
    if not stripped:
        return None
    return len(line) - len(stripped)


def _unindent(text: str) -> str:
    """Remove common indentation, ignoring the first line when measuring it."""
    ignore_first = text.startswith("\n") or text.startswith("\r\n")
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]

    indents = [
        indent
        for indent in (_leading_indent(line) for line in lines[1:])
        if indent is not None
    ]
    spaces = min(indents, default=0)

    result: List[str] = []
    for index, line in enumerate(lines):
        if index == 0:
            if not ignore_first:
                result.append(line)
        else:
            result.append(line[spaces:] if len(line) > spaces else "")
    return "\n".join(result)


def make_manifest_template(template: str) -> str:
    """Normalise a manifest template: no indentation, the repository URL
    filled in, and a single trailing newline."""
    contents = _unindent(template.strip()).replace("<|REPOSITORY_URL|>", REPOSITORY_URL)
    return contents + "\n"


class AuthManifest:
    """Authentication tokens for artifact providers, kept in a TOML document
    whose formatting and comments survive edits."""

    def __init__(self, document: Optional[TOMLDocument] = None) -> None:
        if document is None:
            document = tomlkit.parse(make_manifest_template(DEFAULT_CONTENTS))
        self._document = document

    @classmethod
    def load_or_create(cls, directory: _PathLike) -> "AuthManifest":
        """Load the manifest in ``directory``, creating and saving a default one
        if it does not exist."""
        try:
            return cls.load(directory)
        except ManifestNotFoundError:
            manifest = cls()
            manifest.save(directory)
            return manifest

    @classmethod
    def load(cls, directory: _PathLike) -> "AuthManifest":
        """Load ``auth.toml`` from ``directory``.

        Raises ManifestNotFoundError if the file does not exist.
        """
        path = Path(directory) / MANIFEST_FILE_NAME
        logger.debug("Loading manifest %s", path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as err:
            raise ManifestNotFoundError(path) from err
        return cls.parse(text)

    def save(self, directory: _PathLike) -> None:
        """Write the manifest to ``auth.toml`` in ``directory``."""
        path = Path(directory) / MANIFEST_FILE_NAME
        logger.debug("Saving manifest %s", path)
        path.write_text(self.dumps(), encoding="utf-8")

    @classmethod
    def parse(cls, text: str) -> "AuthManifest":
        """Parse manifest text, warning about unknown providers or bad values.

        Raises tomlkit's ParseError for invalid TOML.
        """
        document = tomlkit.parse(text)
        for key, value in document.items():
            try:
                ArtifactProvider.parse(key)
            except ValueError as err:
                logger.warning(
                    "Encountered unknown artifact provider '%s' in auth manifest!"
                    "\nError: %s",
                    key,
                    err,
                )
            if not isinstance(value, str):
                logger.warning(
                    "Encountered invalid value for artifact provider '%s' in auth manifest!"
                    "\nExpected: String"
                    "\nActual: %s",
                    key,
                    type(value).__name__,
                )
        return cls(document)

    def has_token(self, provider: ArtifactProvider) -> bool:
        """Whether an entry exists for the provider."""
        return provider.as_str() in self._document

    def get_token(self, provider: ArtifactProvider) -> Optional[str]:
        """Return the provider's token, or None if absent or not a string."""
        value = self._document.get(provider.as_str())
        if isinstance(value, str):
            return str(value)
        return None

    def get_all_tokens(self) -> Dict[ArtifactProvider, str]:
        """Return every valid token, keyed by provider."""
        tokens: Dict[ArtifactProvider, str] = {}
        for key, value in self._document.items():
            try:
                provider = ArtifactProvider.parse(key)
            except ValueError:
                continue
            if isinstance(value, str):
                tokens[provider] = str(value)
        return tokens

    def set_token(self, provider: ArtifactProvider, token: str) -> bool:
        """Set the provider's token; True if an older entry was replaced."""
        key = provider.as_str()
        existed = key in self._document
        self._document[key] = str(token)
        return existed

    def unset_token(self, provider: ArtifactProvider) -> bool:
        """Remove the provider's token; True if one was present."""
        key = provider.as_str()
        if key not in self._document:
            return False
        del self._document[key]
        return True

    def dumps(self) -> str:
        """Return the manifest as TOML text."""
        return self._document.as_string()

    def __str__(self) -> str:
        return self.dumps()