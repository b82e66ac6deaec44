from __future__ import annotations

from pathlib import Path

from crpairs.logging import get_logger
from crpairs.sources.includes import collect_source_files
from crpairs.sources.locator import find_build_fragments
from crpairs.sources.makefile import get_source_files_from_makefile

logger = get_logger("sources.resolver")


def resolve(program_name: str, repository: str | Path, *, exact_key: bool = False) -> set[Path]:
    """Return the source closure of ``program_name`` as repository-relative paths.

    Seeds come from every ``<program_name>_SOURCES`` declaration in the
    repository's build fragments and are expanded through local quoted
    includes. An empty set means no fragment declares the program.

    Raises SourceResolutionError when a discovered file is outside the
    repository or cannot be read.
    """

    repository = Path(repository)
    visited: set[Path] = set()

    for fragment in find_build_fragments(repository):
        seeds = get_source_files_from_makefile(repository, fragment, program_name, exact_key=exact_key)
        for seed in seeds:
            collect_source_files(repository, visited, seed)

    logger.info("Resolved %d source file(s) for %s in %s", len(visited), program_name, repository)
    return visited


def resolve_sorted(program_name: str, repository: str | Path, *, exact_key: bool = False) -> list[str]:
    return sorted(path.as_posix() for path in resolve(program_name, repository, exact_key=exact_key))
