from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from crpairs.errors import WriterError


def write_metadata(path: Path, document: dict[str, Any]) -> None:
    """Write a metadata document back to ``path`` as indented JSON."""

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise WriterError(f"Failed to write '{path}': {exc}") from exc
