"""Data models for the graph engine."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from graphengine.core.exceptions import VertexOutOfRangeError

Weight = int | float

INF: float = math.inf


def _finite(value: Weight) -> Weight | None:
    """Map infinities to None so results serialize as JSON null."""
    return None if isinstance(value, float) and math.isinf(value) else value


def _check_vertex(v: int, size: int) -> None:
    if not 0 <= v < size:
        raise VertexOutOfRangeError(v, size)


def reconstruct_path(parent: list[int], target: int) -> list[int]:
    """Walk parent pointers back from target. O(path length).

    Returns an empty list when target is negative or the parent chain loops,
    which only happens when parents were left behind by a negative cycle.
    """
    path: list[int] = []
    if target < 0:
        return path
    v = target
    while v != -1:
        if len(path) > len(parent):
            return []
        path.append(v)
        v = parent[v]
    path.reverse()
    return path


@dataclass
class Edge:
    """A weighted edge as recorded by ``Graph.add_edge``."""

    u: int
    v: int
    weight: Weight = 1
    id: int | None = None

    def sort_key(self) -> tuple[Weight, int, int]:
        return (self.weight, self.u, self.v)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"u": self.u, "v": self.v, "weight": self.weight}
        if self.id is not None:
            data["id"] = self.id
        return data


@dataclass
class BFSResult:
    """Edge-count distances (-1 if unreachable) and BFS tree parents."""

    distances: list[int]
    parents: list[int]

    def path_to(self, target: int) -> list[int]:
        _check_vertex(target, len(self.distances))
        if self.distances[target] == -1:
            return []
        return reconstruct_path(self.parents, target)

    def to_dict(self) -> dict[str, Any]:
        return {"distances": list(self.distances), "parents": list(self.parents)}


@dataclass
class ShortestPaths:
    """Single-source distances (``INF`` if unreachable) and parent pointers."""

    source: int
    distances: list[Weight]
    parents: list[int]

    def is_reachable(self, target: int) -> bool:
        _check_vertex(target, len(self.distances))
        return self.distances[target] != INF

    def path_to(self, target: int) -> list[int]:
        if not self.is_reachable(target):
            return []
        return reconstruct_path(self.parents, target)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "distances": [_finite(d) for d in self.distances],
            "parents": list(self.parents),
        }


@dataclass
class BellmanFordResult(ShortestPaths):
    """Shortest paths plus the negative-cycle flag.

    When ``has_negative_cycle`` is set, distances of vertices reachable from
    the cycle are not meaningful.
    """

    has_negative_cycle: bool = False

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["has_negative_cycle"] = self.has_negative_cycle
        return data


@dataclass
class AllPairsShortestPaths:
    """Distance matrix and next-hop matrix from Floyd-Warshall."""

    distances: list[list[Weight]]
    next_hop: list[list[int]]

    @property
    def has_negative_cycle(self) -> bool:
        return any(row[i] < 0 for i, row in enumerate(self.distances))

    def path(self, source: int, target: int) -> list[int] | None:
        """Reconstruct a shortest path by repeated next-hop lookup.

        Returns None if target is unreachable or the walk runs through a
        negative cycle.
        """
        _check_vertex(source, len(self.distances))
        _check_vertex(target, len(self.distances))
        if self.next_hop[source][target] == -1:
            return None
        nodes = [source]
        current = source
        while current != target:
            current = self.next_hop[current][target]
            if current == -1 or len(nodes) > len(self.distances):
                return None
            nodes.append(current)
        return nodes

    def to_dict(self) -> dict[str, Any]:
        return {
            "distances": [[_finite(d) for d in row] for row in self.distances],
            "next_hop": [list(row) for row in self.next_hop],
            "has_negative_cycle": self.has_negative_cycle,
        }


@dataclass
class ConnectivityReport:
    """Bridges and articulation points of an undirected graph."""

    bridges: list[tuple[int, int]] = field(default_factory=list)
    articulation_points: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "bridges": [list(b) for b in self.bridges],
            "articulation_points": list(self.articulation_points),
        }


@dataclass
class SpanningTree:
    """A minimum spanning tree: total weight and the accepted edges."""

    total_weight: Weight
    edges: list[Edge] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.edges)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_weight": self.total_weight,
            "edges": [e.to_dict() for e in self.edges],
        }
