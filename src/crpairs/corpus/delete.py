from __future__ import annotations

import shutil
from pathlib import Path

from crpairs.config import CorpusPaths
from crpairs.logging import get_logger

logger = get_logger("corpus.delete")


def delete(paths: CorpusPaths) -> list[Path]:
    """Remove downloaded program pairs and repository clones, if present."""

    removed: list[Path] = []
    for directory in (paths.program_pairs_dir, paths.repository_clones_dir):
        if not directory.exists():
            continue
        shutil.rmtree(directory)
        logger.info("Removed %s", directory)
        removed.append(directory)
    return removed
