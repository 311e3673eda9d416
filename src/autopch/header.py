"""Render and persist the aggregate header."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from autopch.exceptions import DestinationUnwritable

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def include_line(path: str) -> str:
    return f'#include "{path}"'


def render_header(keepers: Iterable[str]) -> str:
    return "".join(f"{include_line(path)}\n" for path in keepers)


def read_existing_header(path: Path) -> str | None:
    """Return the current header text, or ``None`` when it must be [re]created."""
    try:
        return path.read_text(encoding=_ENCODING, errors=_ERRORS)
    except OSError:
        return None


def header_needs_update(path: Path, text: str) -> bool:
    return read_existing_header(path) != text


def write_header_if_changed(path: Path, text: str) -> bool:
    """Write ``text`` to ``path`` unless it already holds exactly that content.

    Leaving an up-to-date header untouched keeps its timestamp, so the build
    does not re-precompile it.
    """
    if not header_needs_update(path, text):
        return False
    try:
        with path.open("w", encoding=_ENCODING, errors=_ERRORS, newline="\n") as handle:
            handle.write(text)
    except OSError as exc:
        raise DestinationUnwritable(path, type(exc).__name__) from exc
    return True
