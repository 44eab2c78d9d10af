"""
Tests for source pattern resolution and reading.
"""

import pytest
from pathlib import Path

from css_bundler.config import DEFAULT_SOURCES
from css_bundler.errors import FileReadError, PatternResolutionError
from css_bundler.sources.resolver import read_sources, resolve_sources

from conftest import write_css


def relative_names(file_set, root):
    return [p.relative_to(root).as_posix() for p in file_set.paths]


def test_pattern_order_then_sorted_matches(tmp_path):
    """Patterns are expanded in order, matches within a pattern are sorted."""
    write_css(tmp_path, "a.css", "")
    write_css(tmp_path, "b/y.css", "")
    write_css(tmp_path, "b/x.css", "")

    file_set = resolve_sources(["a.css", "b/*.css"], tmp_path)

    assert relative_names(file_set, tmp_path) == ["a.css", "b/x.css", "b/y.css"]


def test_default_sources_put_poole_and_hyde_first(theme_dir):
    file_set = resolve_sources(DEFAULT_SOURCES, theme_dir)

    assert relative_names(file_set, theme_dir) == [
        "_css/poole.css",
        "_css/hyde.css",
        "_css/components/buttons.css",
        "_css/syntax.css",
    ]


def test_dedupe_keeps_first_occurrence(theme_dir):
    file_set = resolve_sources(DEFAULT_SOURCES, theme_dir, dedupe=True)
    names = relative_names(file_set, theme_dir)

    assert names.count("_css/poole.css") == 1
    assert names.count("_css/hyde.css") == 1


def test_without_dedupe_overlapping_patterns_repeat_files(theme_dir):
    file_set = resolve_sources(DEFAULT_SOURCES, theme_dir, dedupe=False)
    names = relative_names(file_set, theme_dir)

    assert len(names) == 6
    assert names[:2] == ["_css/poole.css", "_css/hyde.css"]
    assert names.count("_css/poole.css") == 2


def test_pattern_records_which_glob_matched(theme_dir):
    file_set = resolve_sources(DEFAULT_SOURCES, theme_dir)

    patterns = [f.pattern for f in file_set]
    assert patterns == ["_css/poole.css", "_css/hyde.css", "_css/**/*.css", "_css/**/*.css"]


def test_zero_match_pattern_is_not_an_error(theme_dir):
    file_set = resolve_sources(["_css/missing/*.css", "_css/poole.css"], theme_dir)

    assert relative_names(file_set, theme_dir) == ["_css/poole.css"]


def test_missing_root_matches_nothing(tmp_path):
    file_set = resolve_sources(DEFAULT_SOURCES, tmp_path / "does-not-exist")

    assert len(file_set) == 0
    assert file_set.paths == []


def test_directories_are_not_matched(tmp_path):
    (tmp_path / "dir.css").mkdir()
    write_css(tmp_path, "real.css", "")

    file_set = resolve_sources(["*.css"], tmp_path)

    assert relative_names(file_set, tmp_path) == ["real.css"]


def test_negated_pattern_excludes_files(theme_dir):
    file_set = resolve_sources([*DEFAULT_SOURCES, "!_css/components/**/*.css"], theme_dir)
    names = relative_names(file_set, theme_dir)

    assert "_css/components/buttons.css" not in names
    assert names == ["_css/poole.css", "_css/hyde.css", "_css/syntax.css"]


def test_negated_pattern_only_affects_earlier_patterns(theme_dir):
    file_set = resolve_sources(["!_css/poole.css", "_css/poole.css"], theme_dir)

    assert relative_names(file_set, theme_dir) == ["_css/poole.css"]


@pytest.mark.parametrize("pattern", ["", "   ", "!", "/etc/*.css"])
def test_invalid_patterns_raise(tmp_path, pattern):
    with pytest.raises(PatternResolutionError):
        resolve_sources([pattern], tmp_path)


def test_non_string_pattern_raises(tmp_path):
    with pytest.raises(PatternResolutionError):
        resolve_sources([42], tmp_path)


def test_read_sources_in_order(theme_dir):
    file_set = resolve_sources(["_css/hyde.css", "_css/poole.css"], theme_dir)

    contents = read_sources(file_set)

    assert contents[0].startswith("/* theme */")
    assert contents[1] == "body{margin:0}\n"


def test_read_invalid_utf8_raises_with_path(theme_dir):
    bad = theme_dir / "_css" / "broken.css"
    bad.write_bytes(b"\xff\xfe\x00body{}")

    file_set = resolve_sources(["_css/*.css"], theme_dir)

    with pytest.raises(FileReadError) as excinfo:
        read_sources(file_set)

    assert excinfo.value.path == bad
    assert "broken.css" in str(excinfo.value)


def test_file_removed_after_resolution_raises(theme_dir):
    file_set = resolve_sources(["_css/*.css"], theme_dir)
    (theme_dir / "_css" / "hyde.css").unlink()

    with pytest.raises(FileReadError) as excinfo:
        read_sources(file_set)

    assert excinfo.value.path == theme_dir / "_css" / "hyde.css"


def test_resolution_is_repeatable(theme_dir):
    first = resolve_sources(DEFAULT_SOURCES, theme_dir)
    second = resolve_sources(DEFAULT_SOURCES, theme_dir)

    assert first == second
