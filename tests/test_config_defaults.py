from __future__ import annotations

from pathlib import Path

from autopch import config


def test_load_config_missing_file_is_empty(tmp_path: Path) -> None:
    assert config.load_config(root=tmp_path) == {}


def test_load_config_invalid_toml_is_empty(tmp_path: Path) -> None:
    path = tmp_path / "autopch.toml"
    path.write_text("[autopch\nstrict = ", encoding="utf-8")
    assert config.load_config(config_path=path) == {}


def test_generation_defaults_reads_section(tmp_path: Path) -> None:
    (tmp_path / "autopch.toml").write_text(
        "[autopch]\n"
        'patterns = ["/usr/include/.*", "boost/.{1,3}"]\n'
        'pattern_file = "pch.regex"\n'
        'format = "msvc"\n'
        "strict = true\n"
        "max_depth = 64\n",
        encoding="utf-8",
    )
    section = config.generation_defaults(root=tmp_path)
    assert config.config_patterns(section) == ["/usr/include/.*", "boost/.{1,3}"]
    assert config.config_pattern_file(section) == Path("pch.regex")
    assert config.config_text(section, "format") == "msvc"
    assert config.config_strict(section) is True
    assert config.config_max_depth(section) == 64


def test_pattern_file_resolves_against_base(tmp_path: Path) -> None:
    section = {"pattern_file": "pch.regex"}
    assert config.config_pattern_file(section, base=tmp_path) == tmp_path / "pch.regex"
    absolute = tmp_path / "elsewhere.regex"
    assert config.config_pattern_file({"pattern_file": str(absolute)}, base=Path("x")) == absolute
    assert config.config_pattern_file({"pattern_file": "  "}, base=tmp_path) is None


def test_section_must_be_a_table(tmp_path: Path) -> None:
    (tmp_path / "autopch.toml").write_text('autopch = "nope"\n', encoding="utf-8")
    assert config.generation_defaults(root=tmp_path) == {}


def test_pattern_string_is_a_single_regex() -> None:
    assert config.config_patterns({"patterns": "a{1,2}\\.h"}) == ["a{1,2}\\.h"]
    assert config.config_patterns({"patterns": ["a", "", 3]}) == ["a"]
    assert config.config_patterns(None) == []


def test_scalar_coercions() -> None:
    assert config.config_strict({"strict": "yes"}) is True
    assert config.config_strict({"strict": 0}) is False
    assert config.config_strict({}) is False
    assert config.config_max_depth({"max_depth": "12"}) == 12
    assert config.config_max_depth({"max_depth": 0}) is None
    assert config.config_max_depth({"max_depth": True}) is None
    assert config.config_text({"format": ""}, "format") is None


def test_merge_payload_skips_none_values() -> None:
    merged = config.merge_payload(
        {"format": None, "strict": False},
        {"format": "gcc", "strict": True, "max_depth": 8},
    )
    assert merged == {"format": "gcc", "strict": False, "max_depth": 8}
