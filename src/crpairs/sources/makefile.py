"""Extract a program's declared sources from Automake-style fragments.

Only ``<program>_SOURCES`` assignments are understood. The build system is
never evaluated: variables and macros in a source list are treated as
literal tokens, and only each token's base name is looked up in the
repository.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Iterable

from crpairs.logging import get_logger
from crpairs.sources.locator import find_files

logger = get_logger("sources.makefile")


def sources_key(program_name: str) -> str:
    return f"{program_name}_SOURCES"


def normalize_continuations(lines: Iterable[str]) -> list[str]:
    """Join backslash-continued lines into logical lines.

    A trailing backslash is dropped and the next physical line is appended
    with no separator. A continuation left dangling at the end of input is
    still returned as the last logical line.
    """

    normalized: list[str] = []
    continued = ""

    for line in lines:
        trimmed = line.rstrip()
        if trimmed.endswith("\\"):
            continued += trimmed.rstrip("\\")
            continue
        normalized.append(continued + trimmed)
        continued = ""

    if continued:
        normalized.append(continued)

    return normalized


def line_declares_sources(line: str, key: str, *, exact_key: bool = False) -> bool:
    # Substring match by default: "diff_SOURCES" also matches
    # "cmp_diff_SOURCES". exact_key compares the assigned variable name only.
    if not exact_key:
        return key in line
    tokens = line.split()
    return bool(tokens) and tokens[0] == key


def source_tokens(line: str) -> list[str]:
    """Return the right-hand side tokens of ``name = a.c b.c``."""

    return line.split()[2:]


def token_file_name(token: str) -> str:
    return PurePosixPath(token).name


def paths_from_line(line: str, repository: Path) -> list[Path]:
    paths: list[Path] = []
    for token in source_tokens(line):
        paths.extend(find_files(token_file_name(token), repository))
    return paths


def get_source_files_from_makefile(
    repository: Path,
    makefile_path: Path,
    program_name: str,
    *,
    exact_key: bool = False,
) -> list[Path]:
    """Return the repository files declared as ``program_name``'s sources.

    An unreadable fragment is logged and contributes nothing. A token that
    matches no file, or several, contributes zero or several paths.
    """

    try:
        with makefile_path.open("r", encoding="utf-8", errors="replace") as handle:
            raw_lines = handle.readlines()
    except OSError as exc:
        logger.warning("Failed to read build fragment %s: %s", makefile_path, exc)
        return []

    key = sources_key(program_name)
    paths: list[Path] = []
    for line in normalize_continuations(raw_lines):
        if line_declares_sources(line, key, exact_key=exact_key):
            paths.extend(paths_from_line(line, repository))

    logger.debug("%s declares %d source match(es) for %s", makefile_path, len(paths), key)
    return paths
