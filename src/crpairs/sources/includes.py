"""Follow local ``#include "..."`` directives to a closed set of files."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from crpairs.errors import SourceResolutionError
from crpairs.logging import get_logger
from crpairs.sources.locator import find_files

INCLUDE_PREFIX = '#include "'
INCLUDE_SUFFIX = '"'

logger = get_logger("sources.includes")


def parse_include(line: str) -> str | None:
    """Return the quoted include target of ``line`` or None.

    Only the literal form ``#include "name"`` spanning the whole line is
    recognized; angle-bracket and macro includes are ignored.
    """

    line = line.rstrip("\r\n")
    # The opening quote cannot double as the closing one.
    if len(line) < len(INCLUDE_PREFIX) + len(INCLUDE_SUFFIX):
        return None
    if not line.startswith(INCLUDE_PREFIX) or not line.endswith(INCLUDE_SUFFIX):
        return None
    return line[len(INCLUDE_PREFIX) : -len(INCLUDE_SUFFIX)]


def read_includes(path: Path) -> list[str]:
    try:
        with path.open("r", encoding="utf-8", errors="replace") as handle:
            return [target for target in map(parse_include, handle) if target is not None]
    except OSError as exc:
        raise SourceResolutionError(f"Failed to read source file '{path}': {exc}") from exc


def relative_to_repository(repository: Path, path: Path) -> Path:
    try:
        return path.relative_to(repository)
    except ValueError as exc:
        raise SourceResolutionError(f"'{path}' is not inside repository '{repository}'") from exc


def collect_source_files(repository: Path, visited: set[Path], root: Path) -> None:
    """Add ``root`` and every file it reaches through quoted includes to ``visited``.

    ``visited`` holds repository-relative paths and is the only guard
    against include cycles: a file already in it is not read again. The
    walk is depth-first over an explicit stack so long include chains do
    not hit the interpreter's recursion limit.
    """

    pending = [root]
    while pending:
        path = pending.pop()
        relative_path = relative_to_repository(repository, path)
        if relative_path in visited:
            continue
        visited.add(relative_path)

        children: list[Path] = []
        for target in read_includes(path):
            matches = find_files(PurePosixPath(target).name, repository)
            if not matches:
                logger.debug("Include %r in %s matches no file", target, relative_path)
            children.extend(matches)

        # Reversed so the first include is walked first.
        pending.extend(reversed(children))
