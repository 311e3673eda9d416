"""Ordered regex rules deciding which headers go into the aggregate header."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from autopch.exceptions import InvalidPattern, SourceUnreadable


def _compile(pattern: str, *, line_number: int | None = None) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise InvalidPattern(pattern, str(exc), line_number=line_number) from exc


@dataclass(frozen=True)
class PatternSet:
    """Regexes tested, in order, with full-match semantics against a path."""

    rules: tuple[re.Pattern[str], ...] = ()

    @classmethod
    def from_strings(cls, patterns: Iterable[str]) -> PatternSet:
        return cls(rules=tuple(_compile(pattern) for pattern in patterns))

    @classmethod
    def from_config(
        cls,
        inline: Sequence[str] = (),
        pattern_file: Path | None = None,
        *,
        encoding: str = "utf-8",
    ) -> PatternSet:
        rules = [_compile(pattern) for pattern in inline]
        if pattern_file is not None:
            rules.extend(load_patterns(pattern_file, encoding=encoding).rules)
        return cls(rules=tuple(rules))

    @property
    def sources(self) -> list[str]:
        return [rule.pattern for rule in self.rules]

    def matches(self, path: str) -> bool:
        return any(rule.fullmatch(path) is not None for rule in self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __bool__(self) -> bool:
        return bool(self.rules)


def parse_patterns(lines: Iterable[str]) -> PatternSet:
    rules: list[re.Pattern[str]] = []
    for line_number, raw in enumerate(lines, start=1):
        pattern = raw.rstrip("\r\n")
        if not pattern:
            continue
        rules.append(_compile(pattern, line_number=line_number))
    return PatternSet(rules=tuple(rules))


def load_patterns(path: Path, *, encoding: str = "utf-8") -> PatternSet:
    """Read one regex per line; blank lines are skipped."""
    try:
        with path.open("r", encoding=encoding) as handle:
            return parse_patterns(handle)
    except (OSError, UnicodeError) as exc:
        raise SourceUnreadable(path, type(exc).__name__) from exc
