from __future__ import annotations

import os
from pathlib import Path

import pytest

from autopch.exceptions import DestinationUnwritable
from autopch.header import (
    header_needs_update,
    read_existing_header,
    render_header,
    write_header_if_changed,
)


def test_render_header_one_include_per_keeper() -> None:
    assert render_header(["a.h", "sys/b.h"]) == '#include "a.h"\n#include "sys/b.h"\n'
    assert render_header([]) == ""


def test_missing_header_reads_as_none(tmp_path: Path) -> None:
    assert read_existing_header(tmp_path / "pch.h") is None
    assert header_needs_update(tmp_path / "pch.h", "")


def test_write_creates_then_leaves_unchanged_header_alone(tmp_path: Path) -> None:
    target = tmp_path / "pch.h"
    text = render_header(["a.h"])
    assert write_header_if_changed(target, text) is True
    assert target.read_text(encoding="utf-8") == text

    os.utime(target, (1_000_000, 1_000_000))
    assert write_header_if_changed(target, text) is False
    assert target.stat().st_mtime == 1_000_000


def test_write_replaces_stale_header(tmp_path: Path) -> None:
    target = tmp_path / "pch.h"
    target.write_text('#include "old.h"\n', encoding="utf-8")
    assert write_header_if_changed(target, render_header(["new.h"])) is True
    assert target.read_text(encoding="utf-8") == '#include "new.h"\n'


def test_write_reports_unwritable_destination(tmp_path: Path) -> None:
    with pytest.raises(DestinationUnwritable) as excinfo:
        write_header_if_changed(tmp_path / "missing" / "pch.h", render_header(["a.h"]))
    assert "for writing" in str(excinfo.value)
