"""Error kinds raised by autopch."""

from __future__ import annotations


class AutoPchError(RuntimeError):
    """Base class for failures that abort a generation run."""


class SourceUnreadable(AutoPchError):
    """A deps log or pattern file could not be opened for reading."""

    def __init__(self, path: object, reason: str = "") -> None:
        message = f"Failed to open {path} for reading."
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path


class DestinationUnwritable(AutoPchError):
    """The aggregate header could not be opened for writing."""

    def __init__(self, path: object, reason: str = "") -> None:
        message = f"Failed to open {path} for writing."
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path


class MalformedLog(AutoPchError):
    """The include nesting in a deps log cannot be reconstructed."""

    def __init__(self, message: str, *, line_number: int) -> None:
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number


class InvalidPattern(AutoPchError):
    def __init__(self, pattern: str, reason: str, *, line_number: int | None = None) -> None:
        where = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f"invalid pattern {pattern!r}{where}: {reason}")
        self.pattern = pattern
        self.line_number = line_number


class UnknownLogFormat(AutoPchError):
    def __init__(self, format_id: str) -> None:
        super().__init__(f"unknown deps log format: {format_id}")
        self.format_id = format_id


class GraphFrozenError(AutoPchError):
    """Raised when an include graph is mutated after parsing finished."""
