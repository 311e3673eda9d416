from __future__ import annotations

from dataclasses import dataclass

from autopch.ingest.format_contract import strip_line_terminator

GCC_NESTING_MARKER = "."


@dataclass(frozen=True)
class GccLogFormat:
    """``g++ -H`` output: one dot per nesting level, a space, then the path."""

    format_id: str = "gcc"
    marker: str = GCC_NESTING_MARKER

    def split_line(self, line: str) -> tuple[int, str]:
        text = strip_line_terminator(line)
        depth = len(text) - len(text.lstrip(self.marker))
        if depth == 0:
            return 0, text
        payload = text[depth:]
        if payload.startswith(" "):
            payload = payload[1:]
        return depth, payload
