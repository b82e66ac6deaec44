"""Metadata parsing, downloading and cleanup for the program-pair corpus."""

from .delete import delete
from .downloader import download_program_pairs
from .parser import parse

__all__ = ["delete", "download_program_pairs", "parse"]
