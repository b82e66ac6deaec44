"""Error types shared by the resolver and the corpus collaborators."""

from __future__ import annotations


class CorpusError(RuntimeError):
    """Base class for errors the CLI reports instead of crashing."""


class SourceResolutionError(CorpusError):
    """Raised when a discovered file lies outside the repository or cannot be read."""


class ParserError(CorpusError):
    """Raised when a metadata file cannot be read, decoded, or validated."""


class WriterError(CorpusError):
    """Raised when a metadata file cannot be written back."""


class DownloaderError(CorpusError):
    """Raised when cloning a repository or staging its files fails."""
