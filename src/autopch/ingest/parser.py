"""Rebuild the include tree from an indentation-encoded deps log."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from autopch.exceptions import MalformedLog, SourceUnreadable
from autopch.graph import IncludeGraph
from autopch.ingest.format_contract import LogFormat
from autopch.ingest.registry import resolve_format

DEFAULT_MAX_DEPTH = 256


class LineCursor:
    """Line iterator with a one-line pushback buffer."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines: Iterator[str] = iter(lines)
        self._pending: str | None = None
        self.line_number = 0

    def peek(self) -> str | None:
        if self._pending is None:
            self._pending = next(self._lines, None)
        return self._pending

    def consume(self) -> str | None:
        line = self.peek()
        self._pending = None
        if line is not None:
            self.line_number += 1
        return line


@dataclass
class _Frame:
    parent: int
    last_child: int
    depth: int


@dataclass(frozen=True)
class ParsedLog:
    graph: IncludeGraph
    log_format: str
    line_count: int


def _build_graph(
    cursor: LineCursor,
    log_format: LogFormat,
    *,
    strict: bool,
    max_depth: int,
) -> IncludeGraph:
    graph = IncludeGraph()
    stack = [_Frame(parent=graph.root, last_child=graph.root, depth=0)]
    previous_depth = 0
    while (line := cursor.peek()) is not None:
        depth, path = log_format.split_line(line)
        if depth == 0:
            cursor.consume()
            continue
        line_number = cursor.line_number + 1
        if not path.strip():
            if strict:
                raise MalformedLog("include line has no path", line_number=line_number)
            cursor.consume()
            continue
        if depth > max_depth:
            raise MalformedLog(
                f"include nesting depth {depth} exceeds limit {max_depth}",
                line_number=line_number,
            )
        if strict and depth > previous_depth + 1:
            raise MalformedLog(
                f"nesting jumps from depth {previous_depth} to {depth}",
                line_number=line_number,
            )
        frame = stack[-1]
        if depth <= frame.depth:
            # Belongs to an ancestor; the enclosing frame re-reads it.
            stack.pop()
            continue
        if depth == frame.depth + 1:
            vertex = graph.add_vertex(path)
            graph.add_edge(frame.parent, vertex)
            frame.last_child = vertex
            previous_depth = depth
            cursor.consume()
            continue
        stack.append(
            _Frame(parent=frame.last_child, last_child=frame.last_child, depth=frame.depth + 1)
        )
    return graph.freeze()


def parse_log(
    lines: Iterable[str],
    *,
    log_format: str | None = None,
    msvc_prefix: str | None = None,
    strict: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> IncludeGraph:
    return parse_log_detailed(
        lines,
        log_format=log_format,
        msvc_prefix=msvc_prefix,
        strict=strict,
        max_depth=max_depth,
    ).graph


def parse_log_detailed(
    lines: Iterable[str],
    *,
    log_format: str | None = None,
    msvc_prefix: str | None = None,
    strict: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ParsedLog:
    """Parse a deps log into a frozen :class:`IncludeGraph`.

    ``log_format`` is ``"gcc"``, ``"msvc"`` or ``None``/``"auto"``; auto-detection
    looks at the first character of the log. Lines that jump several levels at
    once are resolved one level at a time below the most recent include at each
    level, unless ``strict`` is set, in which case they raise :class:`MalformedLog`.
    """
    cursor = LineCursor(lines)
    chosen = resolve_format(log_format, first_line=cursor.peek(), msvc_prefix=msvc_prefix)
    graph = _build_graph(cursor, chosen, strict=strict, max_depth=max_depth)
    return ParsedLog(graph=graph, log_format=chosen.format_id, line_count=cursor.line_number)


def read_log(
    path: Path,
    *,
    log_format: str | None = None,
    msvc_prefix: str | None = None,
    strict: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
    encoding: str = "utf-8",
) -> ParsedLog:
    try:
        with path.open("r", encoding=encoding, errors="surrogateescape") as handle:
            return parse_log_detailed(
                handle,
                log_format=log_format,
                msvc_prefix=msvc_prefix,
                strict=strict,
                max_depth=max_depth,
            )
    except OSError as exc:
        raise SourceUnreadable(path, type(exc).__name__) from exc
