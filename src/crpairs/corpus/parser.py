"""Parse and validate JSON metadata files describing program pairs.

Two document shapes are accepted. Individual metadata lists complete pairs:

    {"pairs": [{"program_name": ..., "c_program": {...}, "rust_program": {...}, ...}]}

Project metadata factors the fields shared by every pair of one project into
``project_information`` and lists only per-program fields under ``pairs``.
Both are parsed into the same :class:`Metadata` structure. Validation is
strict and fail-fast.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from crpairs.corpus.schema import Features, Language, Metadata, Program, ProgramPair
from crpairs.errors import ParserError

PROGRAM_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.+-]*$")

INDIVIDUAL_PAIR_KEYS = {
    "program_name",
    "program_description",
    "translation_tools",
    "feature_relationship",
    "c_program",
    "rust_program",
}
INDIVIDUAL_PROGRAM_KEYS = {"documentation_url", "repository_url", "source_paths"}

PROJECT_INFORMATION_KEYS = {"translation_tools", "feature_relationship", "c_program", "rust_program"}
PROJECT_INFORMATION_PROGRAM_KEYS = {"documentation_url", "repository_url"}
PROJECT_PAIR_KEYS = {"program_name", "program_description", "c_program", "rust_program"}
PROJECT_PROGRAM_KEYS = {"source_paths"}


def load_document(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ParserError(f"Failed to read '{path}': {exc}") from exc
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ParserError(f"Failed to deserialize '{path}': {exc}") from exc
    if not isinstance(payload, dict):
        raise ParserError(f"Metadata in '{path}' must be a JSON object")
    return payload


def _require_keys(obj: Any, keys: set[str], where: str) -> dict[str, Any]:
    if not isinstance(obj, dict):
        raise ParserError(f"{where} must be an object")
    missing = sorted(keys - set(obj.keys()))
    if missing:
        raise ParserError(f"Missing keys in {where}: {missing}")
    return obj


def _require_str(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise ParserError(f"{where} must be a string")
    return value


def _require_str_list(value: Any, where: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ParserError(f"{where} must be a list of strings")
    return list(value)


def _program_name(value: Any, where: str) -> str:
    name = _require_str(value, where)
    if not PROGRAM_NAME_RE.fullmatch(name):
        raise ParserError(f"{where} is not a valid program name: {name!r}")
    return name


def _feature_relationship(value: Any, where: str) -> Features:
    try:
        return Features(_require_str(value, where))
    except ValueError:
        allowed = ", ".join(feature.value for feature in Features)
        raise ParserError(f"{where} must be one of {allowed}: {value!r}") from None


def _individual_pair(obj: Any, index: int) -> ProgramPair:
    where = f"pairs[{index}]"
    pair = _require_keys(obj, INDIVIDUAL_PAIR_KEYS, where)
    programs = {}
    for language in Language:
        key = f"{language.value}_program"
        program = _require_keys(pair[key], INDIVIDUAL_PROGRAM_KEYS, f"{where}.{key}")
        programs[language] = Program(
            language=language,
            documentation_url=_require_str(program["documentation_url"], f"{where}.{key}.documentation_url"),
            repository_url=_require_str(program["repository_url"], f"{where}.{key}.repository_url"),
            source_paths=_require_str_list(program["source_paths"], f"{where}.{key}.source_paths"),
        )

    return ProgramPair(
        program_name=_program_name(pair["program_name"], f"{where}.program_name"),
        program_description=_require_str(pair["program_description"], f"{where}.program_description"),
        translation_tools=_require_str_list(pair["translation_tools"], f"{where}.translation_tools"),
        feature_relationship=_feature_relationship(pair["feature_relationship"], f"{where}.feature_relationship"),
        c_program=programs[Language.C],
        rust_program=programs[Language.RUST],
    )


def _project_pair(obj: Any, index: int, information: dict[str, Any]) -> ProgramPair:
    where = f"pairs[{index}]"
    pair = _require_keys(obj, PROJECT_PAIR_KEYS, where)
    programs = {}
    for language in Language:
        key = f"{language.value}_program"
        shared = _require_keys(information[key], PROJECT_INFORMATION_PROGRAM_KEYS, f"project_information.{key}")
        program = _require_keys(pair[key], PROJECT_PROGRAM_KEYS, f"{where}.{key}")
        programs[language] = Program(
            language=language,
            documentation_url=_require_str(shared["documentation_url"], f"project_information.{key}.documentation_url"),
            repository_url=_require_str(shared["repository_url"], f"project_information.{key}.repository_url"),
            source_paths=_require_str_list(program["source_paths"], f"{where}.{key}.source_paths"),
        )

    return ProgramPair(
        program_name=_program_name(pair["program_name"], f"{where}.program_name"),
        program_description=_require_str(pair["program_description"], f"{where}.program_description"),
        translation_tools=_require_str_list(information["translation_tools"], "project_information.translation_tools"),
        feature_relationship=_feature_relationship(
            information["feature_relationship"], "project_information.feature_relationship"
        ),
        c_program=programs[Language.C],
        rust_program=programs[Language.RUST],
    )


def parse_document(payload: dict[str, Any]) -> Metadata:
    pairs = payload.get("pairs")
    if not isinstance(pairs, list):
        raise ParserError("Metadata must contain a 'pairs' list")

    if "project_information" in payload:
        information = _require_keys(payload["project_information"], PROJECT_INFORMATION_KEYS, "project_information")
        return Metadata(
            pairs=[_project_pair(pair, ix, information) for ix, pair in enumerate(pairs)],
            kind="project",
        )

    return Metadata(pairs=[_individual_pair(pair, ix) for ix, pair in enumerate(pairs)], kind="individual")


def parse(path: Path) -> Metadata:
    """Parse and validate the metadata file at ``path``."""

    payload = load_document(path)
    try:
        return parse_document(payload)
    except ParserError as exc:
        raise ParserError(f"Invalid metadata in '{path}': {exc}") from exc
