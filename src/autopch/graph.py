"""Include graph: header paths as vertices, "includer -> included" as edges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import networkx as nx

from autopch.exceptions import GraphFrozenError

ROOT_PATH = ""


def normalize_path(path: str) -> str:
    return path.replace("\\", "/")


@dataclass(frozen=True)
class IncludeEdge:
    source: int
    target: int


class IncludeGraph:
    """Directed multigraph of header inclusions for one translation unit.

    Vertices are integers carrying a ``path`` attribute. Vertex 0 is the root
    and stands for the compiled source file itself; its path is empty. Every
    other vertex is unique by normalized path. Successors are ordered by the
    first time each include was seen in the log; repeated includes of the same
    pair are kept as parallel edges.
    """

    def __init__(self) -> None:
        self._graph: nx.MultiDiGraph = nx.MultiDiGraph()
        self._paths: list[str] = []
        self._index: dict[str, int] = {}
        self.root = self._new_vertex(ROOT_PATH)

    def _check_mutable(self) -> None:
        if self.frozen:
            raise GraphFrozenError("include graph is read-only once parsing completes")

    def _new_vertex(self, path: str) -> int:
        vertex = len(self._paths)
        self._graph.add_node(vertex, path=path)
        self._paths.append(path)
        self._index[path] = vertex
        return vertex

    def add_vertex(self, path: str) -> int:
        """Return the vertex for ``path``, creating it on first sight."""
        self._check_mutable()
        normalized = normalize_path(path)
        vertex = self._index.get(normalized)
        if vertex is None:
            vertex = self._new_vertex(normalized)
        return vertex

    def add_edge(self, source: int, target: int) -> None:
        self._check_mutable()
        if target == self.root:
            raise ValueError("the root vertex cannot be included")
        self._graph.add_edge(source, target)

    def freeze(self) -> IncludeGraph:
        nx.freeze(self._graph)
        return self

    @property
    def frozen(self) -> bool:
        return nx.is_frozen(self._graph)

    def as_networkx(self) -> nx.MultiDiGraph:
        return self._graph

    @property
    def vertex_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def vertex_for(self, path: str) -> int | None:
        return self._index.get(normalize_path(path))

    def path_of(self, vertex: int) -> str:
        return self._paths[vertex]

    def out_edges(self, vertex: int) -> tuple[int, ...]:
        return tuple(target for _, target in self._graph.out_edges(vertex))

    def in_edges(self, vertex: int) -> tuple[int, ...]:
        return tuple(source for source, _ in self._graph.in_edges(vertex))

    def parents(self, vertex: int) -> list[str]:
        return [self._paths[source] for source in self.in_edges(vertex)]

    def children(self, vertex: int) -> list[str]:
        return [self._paths[target] for target in self.out_edges(vertex)]

    def edges(self) -> Iterator[IncludeEdge]:
        for source, target in self._graph.edges():
            yield IncludeEdge(source=source, target=target)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and normalize_path(path) in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IncludeGraph):
            return NotImplemented
        return self._paths == other._paths and list(self.edges()) == list(other.edges())

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True)
class TreeEntry:
    path: str
    depth: int
    repeated: bool


def iter_tree(graph: IncludeGraph) -> Iterator[TreeEntry]:
    """Pre-order walk below the root.

    A header reached a second time is yielded with ``repeated=True`` and its
    subtree is not walked again.
    """
    expanded = {graph.root}
    stack: list[tuple[int, int]] = [
        (target, 1) for target in reversed(graph.out_edges(graph.root))
    ]
    while stack:
        vertex, depth = stack.pop()
        repeated = vertex in expanded
        yield TreeEntry(path=graph.path_of(vertex), depth=depth, repeated=repeated)
        if repeated:
            continue
        expanded.add(vertex)
        stack.extend((target, depth + 1) for target in reversed(graph.out_edges(vertex)))
