"""Providers that artifacts can be fetched from."""

from __future__ import annotations

from enum import Enum


class ArtifactProvider(Enum):
    """An artifact provider; GitHub is the default."""

    GITHUB = "github"

    @classmethod
    def parse(cls, text: str) -> "ArtifactProvider":
        """Parse a provider name, ignoring case and surrounding whitespace."""
        lowered = text.strip().lower()
        for provider in cls:
            if provider.value == lowered:
                return provider
        raise ValueError(f"unknown artifact provider '{lowered}'")

    def as_str(self) -> str:
        """Return the provider's key, such as "github"."""
        return self.value

    def display_name(self) -> str:
        """Return the provider's human-readable name."""
        return _DISPLAY_NAMES[self]

    def __str__(self) -> str:
        return self.as_str()


_DISPLAY_NAMES = {ArtifactProvider.GITHUB: "GitHub"}