from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class GenerationReport(BaseModel):
    deps_file: str
    output: str
    log_format: str
    line_count: int
    vertex_count: int
    edge_count: int
    pattern_count: int
    keepers: List[str]
    written: bool
    pattern_file: Optional[str] = None


class TreeNodeDTO(BaseModel):
    path: str
    depth: int
    repeated: bool = False
