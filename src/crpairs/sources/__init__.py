"""Source-file dependency resolution for C programs."""

from crpairs.errors import SourceResolutionError

from .locator import BUILD_FRAGMENT_NAMES, find_build_fragments, find_files
from .resolver import resolve, resolve_sorted

__all__ = [
    "BUILD_FRAGMENT_NAMES",
    "SourceResolutionError",
    "find_build_fragments",
    "find_files",
    "resolve",
    "resolve_sorted",
]
