"""Configuration and path-safety helpers for the corpus tool."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

WINDOWS_RESERVED_NAMES = {
    "CON",
    "PRN",
    "AUX",
    "NUL",
    *(f"COM{i}" for i in range(1, 10)),
    *(f"LPT{i}" for i in range(1, 10)),
}


def sanitize_path_component(value: str) -> str:
    """Return a validated program name as a directory name safe on Windows.

    The parser already restricts program names to letters, digits and
    ``_.+-`` starting with a letter or digit, so only trailing dots and
    reserved device names (case-insensitive) still need fixing.
    """

    cleaned = value.rstrip(".")
    if cleaned.upper() in WINDOWS_RESERVED_NAMES:
        cleaned = f"{cleaned}_"
    return cleaned


def resolve_root(root: str | Path) -> Path:
    """Normalize the project root into a pathlib.Path."""

    return Path(root)


@dataclass(frozen=True)
class CorpusPaths:
    root: Path

    @classmethod
    def from_root(cls, root: str | Path = ".") -> "CorpusPaths":
        return cls(root=resolve_root(root))

    @property
    def metadata_dir(self) -> Path:
        return self.root / "metadata"

    @property
    def project_metadata_dir(self) -> Path:
        return self.metadata_dir / "projects"

    @property
    def individual_metadata_dir(self) -> Path:
        return self.metadata_dir / "individual"

    @property
    def demo_metadata_dir(self) -> Path:
        return self.metadata_dir / "demo"

    @property
    def program_pairs_dir(self) -> Path:
        return self.root / "program_pairs"

    @property
    def repository_clones_dir(self) -> Path:
        return self.root / "repository_clones"

    def metadata_dirs(self, demo: bool = False) -> list[Path]:
        if demo:
            return [self.demo_metadata_dir]
        return [self.project_metadata_dir, self.individual_metadata_dir]
