"""Heuristics for choosing between artifacts of the same release.

These heuristics may change and are not meant as a stable interface.
"""

from __future__ import annotations

import re
from typing import Any, List

from .arch import Arch
from .opsys import OS, is_word_separator

_SEMVER = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


def _split_words(text: str) -> List[str]:
    """Split on word separators, keeping empty pieces between them."""
    words = [""]
    for char in text:
        if is_word_separator(char):
            words.append("")
        else:
            words[-1] += char
    return words


def _is_version(word: str) -> bool:
    return _SEMVER.match(word.lstrip("v")) is not None


def _is_plain_word(word: str) -> bool:
    """True unless the word names an arch, an OS, a version or is numeric."""
    return (
        Arch.detect(word) is None
        and OS.detect(word) is None
        and not _is_version(word)
        and not all(char.isnumeric() for char in word)
    )


def count_non_tool_mentions(name: str, tool_name: str) -> int:
    """Count how far an artifact name strays from the tool name.

    Words naming an architecture, an OS or a version, and numbers, are
    ignored; every other word that differs from the tool name counts.
    """
    if not name.strip():
        return 0
    name_words = [word for word in _split_words(name) if _is_plain_word(word)]
    tool_words = _split_words(tool_name)
    length_diff = abs(len(name_words) - len(tool_words))
    word_diff = sum(
        1
        for name_word, tool_word in zip(name_words, tool_words)
        if name_word.lower() != tool_word.lower()
    )
    return length_diff + word_diff


def _tool_name(artifact: Any) -> str:
    name = artifact.tool_spec.name
    return name() if callable(name) else name


def compare_preferred_artifact(artifact_a: Any, artifact_b: Any) -> int:
    """Compare artifacts, preferring names that mention the tool most precisely."""
    count_a = count_non_tool_mentions(artifact_a.name or "", _tool_name(artifact_a))
    count_b = count_non_tool_mentions(artifact_b.name or "", _tool_name(artifact_b))
    return (count_a > count_b) - (count_a < count_b)


def compare_preferred_formats(artifact_a: Any, artifact_b: Any) -> int:
    """Compare artifacts by format preference; unknown formats come last."""
    format_a, format_b = artifact_a.format, artifact_b.format
    if format_a is None and format_b is None:
        return 0
    if format_a is None:
        return 1
    if format_b is None:
        return -1
    return (format_a > format_b) - (format_a < format_b)