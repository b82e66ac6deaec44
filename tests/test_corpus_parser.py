import json

import pytest

from crpairs.corpus.parser import parse
from crpairs.corpus.schema import Features, Language
from crpairs.errors import ParserError


def _individual_document():
    return {
        "pairs": [
            {
                "program_name": "ls",
                "program_description": "List directory contents",
                "translation_tools": ["manual"],
                "feature_relationship": "rust_subset_of_c",
                "c_program": {
                    "documentation_url": "https://www.gnu.org/software/coreutils/ls",
                    "repository_url": "https://github.com/coreutils/coreutils.git",
                    "source_paths": ["src/ls.c"],
                },
                "rust_program": {
                    "documentation_url": "https://github.com/uutils/coreutils",
                    "repository_url": "https://github.com/uutils/coreutils.git",
                    "source_paths": ["src/uu/ls"],
                },
            }
        ]
    }


def _project_document():
    return {
        "project_information": {
            "translation_tools": ["manual"],
            "feature_relationship": "overlapping",
            "c_program": {
                "documentation_url": "https://www.gnu.org/software/diffutils",
                "repository_url": "https://git.savannah.gnu.org/git/diffutils.git",
            },
            "rust_program": {
                "documentation_url": "https://github.com/uutils/diffutils",
                "repository_url": "https://github.com/uutils/diffutils.git",
            },
        },
        "pairs": [
            {
                "program_name": "diff",
                "program_description": "Compare files line by line",
                "c_program": {"source_paths": []},
                "rust_program": {"source_paths": ["src/main.rs"]},
            },
            {
                "program_name": "cmp",
                "program_description": "Compare two files byte by byte",
                "c_program": {"source_paths": ["src/cmp.c"]},
                "rust_program": {"source_paths": ["src/cmp.rs"]},
            },
        ],
    }


def _write_json(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_parse_individual_metadata(tmp_path):
    metadata = parse(_write_json(tmp_path / "system-tools.json", _individual_document()))

    assert metadata.kind == "individual"
    pair = metadata.pairs[0]
    assert pair.program_name == "ls"
    assert pair.feature_relationship is Features.RUST_SUBSET_OF_C
    assert pair.c_program.language is Language.C
    assert pair.rust_program.source_paths == ["src/uu/ls"]


def test_parse_project_metadata_copies_shared_fields(tmp_path):
    metadata = parse(_write_json(tmp_path / "diffutils.json", _project_document()))

    assert metadata.kind == "project"
    assert [pair.program_name for pair in metadata.pairs] == ["diff", "cmp"]
    for pair in metadata.pairs:
        assert pair.translation_tools == ["manual"]
        assert pair.feature_relationship is Features.OVERLAPPING
        assert pair.c_program.repository_url == "https://git.savannah.gnu.org/git/diffutils.git"
        assert pair.rust_program.language is Language.RUST
    assert metadata.pairs[1].c_program.source_paths == ["src/cmp.c"]


def test_missing_key_names_the_pair(tmp_path):
    document = _individual_document()
    del document["pairs"][0]["c_program"]["source_paths"]

    with pytest.raises(ParserError, match=r"pairs\[0\]\.c_program"):
        parse(_write_json(tmp_path / "bad.json", document))


def test_unknown_feature_relationship_is_rejected(tmp_path):
    document = _project_document()
    document["project_information"]["feature_relationship"] = "rust_better_than_c"

    with pytest.raises(ParserError, match="feature_relationship"):
        parse(_write_json(tmp_path / "bad.json", document))


def test_invalid_program_name_is_rejected(tmp_path):
    document = _individual_document()
    document["pairs"][0]["program_name"] = "ls -la"

    with pytest.raises(ParserError, match="program name"):
        parse(_write_json(tmp_path / "bad.json", document))


def test_source_paths_must_be_strings(tmp_path):
    document = _project_document()
    document["pairs"][0]["c_program"]["source_paths"] = [1, 2]

    with pytest.raises(ParserError, match="list of strings"):
        parse(_write_json(tmp_path / "bad.json", document))


def test_invalid_json_and_missing_file(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    with pytest.raises(ParserError, match="deserialize"):
        parse(broken)
    with pytest.raises(ParserError, match="Failed to read"):
        parse(tmp_path / "absent.json")


def test_top_level_must_have_pairs(tmp_path):
    with pytest.raises(ParserError, match="pairs"):
        parse(_write_json(tmp_path / "empty.json", {"project_information": {}}))
