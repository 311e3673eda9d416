from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class LogFormat(Protocol):
    format_id: str

    def split_line(self, line: str) -> tuple[int, str]:
        """Return the nesting depth of ``line`` and its payload path.

        Depth 0 marks a line that does not describe an inclusion.
        """
        ...


def strip_line_terminator(line: str) -> str:
    return line.rstrip("\r\n")
