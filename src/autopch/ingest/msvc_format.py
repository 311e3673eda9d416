from __future__ import annotations

from dataclasses import dataclass

from autopch.ingest.format_contract import strip_line_terminator

MSVC_INCLUDE_PREFIX = "Note: including file:"


@dataclass(frozen=True)
class MsvcLogFormat:
    """``cl /showIncludes`` output.

    Each include line starts with a fixed note prefix followed by one space per
    nesting level. Localized compilers print a translated prefix, so it can be
    overridden.
    """

    format_id: str = "msvc"
    prefix: str = MSVC_INCLUDE_PREFIX

    def split_line(self, line: str) -> tuple[int, str]:
        text = strip_line_terminator(line)
        if not text.startswith(self.prefix):
            return 0, text
        rest = text[len(self.prefix):]
        payload = rest.lstrip(" ")
        return len(rest) - len(payload), payload
