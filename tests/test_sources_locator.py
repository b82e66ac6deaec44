import os

import pytest

from crpairs.sources import BUILD_FRAGMENT_NAMES, find_build_fragments, find_files


def _write(root, relative, text=""):
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_find_files_matches_exact_name_at_any_depth(tmp_path):
    top = _write(tmp_path, "util.h")
    nested = _write(tmp_path, "lib/deep/util.h")
    _write(tmp_path, "lib/util.hpp")
    _write(tmp_path, "lib/Util.h")

    assert sorted(find_files("util.h", tmp_path)) == sorted([top, nested])


def test_find_files_has_no_glob_semantics(tmp_path):
    _write(tmp_path, "a.c")
    assert find_files("*.c", tmp_path) == []


def test_find_files_ignores_directories_with_the_name(tmp_path):
    (tmp_path / "util.h").mkdir()
    assert find_files("util.h", tmp_path) == []


def test_find_files_with_empty_name_finds_nothing(tmp_path):
    _write(tmp_path, "a.c")
    assert find_files("", tmp_path) == []


@pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="permissions are not enforced")
def test_unreadable_directory_is_skipped(tmp_path):
    readable = _write(tmp_path, "ok/util.h")
    locked = tmp_path / "locked"
    _write(tmp_path, "locked/util.h")
    locked.chmod(0)
    try:
        assert find_files("util.h", tmp_path) == [readable]
    finally:
        locked.chmod(0o755)


def test_find_build_fragments_recognizes_exactly_three_names(tmp_path):
    expected = [
        _write(tmp_path, "Makefile.am"),
        _write(tmp_path, "src/local.mk"),
        _write(tmp_path, "lib/Makemodule.am"),
    ]
    _write(tmp_path, "Makefile.in")
    _write(tmp_path, "Makefile")
    _write(tmp_path, "makefile.am")

    assert len(BUILD_FRAGMENT_NAMES) == 3
    assert sorted(find_build_fragments(tmp_path)) == sorted(expected)
