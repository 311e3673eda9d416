"""Select the headers to list in the aggregate header.

A header that matches a pattern becomes one ``#include`` line. Everything
reachable below it is pulled in by the compiler when that line is processed,
so coverage propagates down the include edges and covered headers are never
listed again.
"""

from __future__ import annotations

import networkx as nx

from autopch.graph import IncludeGraph
from autopch.patterns import PatternSet

_EXAMINED_EDGE_KINDS = frozenset({"forward", "nontree"})


def compute_keepers(graph: IncludeGraph, patterns: PatternSet) -> list[str]:
    """Return the ordered keeper paths for ``graph``.

    Depth-first from the root, successors in log order. The result is the
    discovery order of matching headers that have no covered includer at the
    time they are examined.
    """
    keepers: list[str] = []
    if not patterns:
        return keepers

    covered = [False] * graph.vertex_count
    for source, target, kind in nx.dfs_labeled_edges(graph.as_networkx()):
        # Start and finish markers come back as (v, v, kind).
        if kind not in _EXAMINED_EDGE_KINDS or source == target:
            continue
        if covered[source]:
            covered[target] = True
            continue
        if covered[target]:
            continue
        path = graph.path_of(target)
        if patterns.matches(path):
            covered[target] = True
            keepers.append(path)
    return keepers
