"""Exception types raised by the analysis core."""

from __future__ import annotations


class JournalNLPError(Exception):
    """Base class for errors raised by journal_nlp."""


class RemoteModelError(JournalNLPError):
    """A remote model was unreachable, slow, or returned something unusable."""


class ConfigError(JournalNLPError, ValueError):
    """Invalid configuration value."""


class VectorLengthMismatchError(JournalNLPError, ValueError):
    """Two vectors compared for similarity have different lengths."""

    def __init__(self, left: int, right: int):
        super().__init__(f"Vectors must have the same length (got {left} and {right})")
        self.left = left
        self.right = right


class EmbeddingParseError(JournalNLPError, ValueError):
    """A serialized embedding could not be decoded into a numeric list."""
