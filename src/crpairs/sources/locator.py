from __future__ import annotations

import os
from pathlib import Path

BUILD_FRAGMENT_NAMES = ("Makefile.am", "local.mk", "Makemodule.am")


def find_files(file_name: str, directory: str | Path) -> list[Path]:
    """Return every file below ``directory`` whose name equals ``file_name``.

    The comparison is exact and case-sensitive. Directories that cannot be
    read are skipped; a partially cloned tree still yields what it can.
    The order of the result is not meaningful.
    """

    if not file_name:
        return []

    matches: list[Path] = []
    # os.walk drops unreadable directories when onerror is None.
    for current, _dirnames, filenames in os.walk(directory):
        if file_name in filenames:
            matches.append(Path(current) / file_name)
    return matches


def find_build_fragments(repository: str | Path) -> list[Path]:
    return [path for name in BUILD_FRAGMENT_NAMES for path in find_files(name, repository)]
