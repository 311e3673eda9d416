from __future__ import annotations

from pathlib import Path

import pytest

from autopch.exceptions import InvalidPattern, SourceUnreadable
from autopch.patterns import PatternSet, load_patterns, parse_patterns


def test_matches_requires_full_match() -> None:
    patterns = PatternSet.from_strings([r"/usr/include/.*", r"boost/.*\.hpp"])
    assert patterns.matches("/usr/include/stdio.h")
    assert patterns.matches("boost/graph.hpp")
    assert not patterns.matches("/opt/usr/include/stdio.h")
    assert not patterns.matches("boost/graph.hpp.bak")


def test_empty_set_is_falsy_and_matches_nothing() -> None:
    patterns = PatternSet()
    assert not patterns
    assert len(patterns) == 0
    assert not patterns.matches("a.h")


def test_parse_patterns_skips_blank_lines() -> None:
    patterns = parse_patterns(["a\\.h\n", "\n", "\r\n", "b.*\n"])
    assert patterns.sources == ["a\\.h", "b.*"]


def test_invalid_pattern_reports_line_number() -> None:
    with pytest.raises(InvalidPattern) as excinfo:
        parse_patterns(["ok\n", "([unclosed\n"])
    assert excinfo.value.line_number == 2


def test_load_patterns_from_file(write_text) -> None:
    path = write_text("pch.regex", "/usr/include/.*\nboost/.*\n")
    assert load_patterns(path).sources == ["/usr/include/.*", "boost/.*"]


def test_load_patterns_reports_unreadable_source(tmp_path: Path) -> None:
    with pytest.raises(SourceUnreadable):
        load_patterns(tmp_path / "missing.regex")


def test_from_config_puts_inline_patterns_first(write_text) -> None:
    path = write_text("pch.regex", "file.*\n")
    patterns = PatternSet.from_config(["inline.*"], path)
    assert patterns.sources == ["inline.*", "file.*"]
    assert PatternSet.from_config([], None).sources == []
