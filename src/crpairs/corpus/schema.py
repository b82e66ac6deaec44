"""Parsed metadata describing C-Rust program pairs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class Features(StrEnum):
    """Feature set of the Rust program relative to its C counterpart."""

    RUST_SUBSET_OF_C = "rust_subset_of_c"
    RUST_EQUIVALENT_TO_C = "rust_equivalent_to_c"
    RUST_SUPERSET_OF_C = "rust_superset_of_c"
    OVERLAPPING = "overlapping"


class Language(StrEnum):
    C = "c"
    RUST = "rust"


@dataclass(frozen=True)
class Program:
    language: Language
    documentation_url: str
    repository_url: str
    source_paths: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ProgramPair:
    program_name: str
    program_description: str
    translation_tools: list[str]
    feature_relationship: Features
    c_program: Program
    rust_program: Program

    def programs(self) -> list[Program]:
        return [self.c_program, self.rust_program]


@dataclass(frozen=True)
class Metadata:
    """The program pairs declared by one metadata file."""

    pairs: list[ProgramPair]
    kind: str = "individual"
