"""Fill in the C source paths of a metadata file from a cloned repository."""

from __future__ import annotations

from pathlib import Path

from crpairs.corpus.parser import load_document, parse_document
from crpairs.corpus.writer import write_metadata
from crpairs.errors import ParserError
from crpairs.logging import get_logger
from crpairs.sources import resolve_sorted

logger = get_logger("metadata")


def update_metadata_file(metadata_path: Path, repository: Path, *, exact_key: bool = False) -> Path:
    """Resolve every pair's C sources in ``repository`` and write them back.

    The document keeps its shape; only ``pairs[i].c_program.source_paths``
    is replaced with the sorted repository-relative closure.
    """

    document = load_document(metadata_path)
    try:
        metadata = parse_document(document)
    except ParserError as exc:
        raise ParserError(f"Invalid metadata in '{metadata_path}': {exc}") from exc

    for raw_pair, pair in zip(document["pairs"], metadata.pairs):
        source_paths = resolve_sorted(pair.program_name, repository, exact_key=exact_key)
        if not source_paths:
            logger.warning("No build fragment declares sources for '%s'", pair.program_name)
        raw_pair["c_program"]["source_paths"] = source_paths

    write_metadata(metadata_path, document)
    logger.info("Successfully updated %s metadata at: %s", metadata.kind, metadata_path)
    return metadata_path
