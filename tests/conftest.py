from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for entry in (ROOT, SRC):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))


import pytest

from autopch.graph import IncludeGraph
from autopch.ingest import parse_log


@pytest.fixture
def write_text(tmp_path: Path):
    def _write(rel: str, content: str) -> Path:
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def gcc_graph():
    def _parse(text: str, **kwargs: object) -> IncludeGraph:
        return parse_log(text.splitlines(keepends=True), log_format="gcc", **kwargs)

    return _parse
