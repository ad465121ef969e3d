"""Core Graph class with adjacency list representation."""

from __future__ import annotations

from graphengine.core.exceptions import InvalidGraphError, VertexOutOfRangeError
from graphengine.core.models import Edge, Weight


class Graph:
    """Weighted graph over the dense vertex range ``[0, n)``.

    Uses adjacency lists kept in insertion order; several algorithms break
    ties by that order. Undirected edges are mirrored into both endpoints'
    lists but recorded once in the edge list.
    """

    __slots__ = ("_n", "_directed", "_adj", "_edges")

    def __init__(self, n: int, directed: bool = False) -> None:
        if n < 0:
            raise InvalidGraphError(f"Vertex count must be non-negative, got {n}")
        self._n = n
        self._directed = directed
        self._adj: list[list[tuple[int, Weight]]] = [[] for _ in range(n)]
        self._edges: list[Edge] = []

    def add_edge(self, u: int, v: int, weight: Weight = 1, id: int | None = None) -> Edge:
        """Add an edge. O(1).

        Raises VertexOutOfRangeError if either endpoint is outside [0, n).
        """
        self.check_vertex(u)
        self.check_vertex(v)
        edge = Edge(u=u, v=v, weight=weight, id=id)
        self._edges.append(edge)
        self._adj[u].append((v, weight))
        if not self._directed:
            self._adj[v].append((u, weight))
        return edge

    def check_vertex(self, v: int) -> None:
        if not 0 <= v < self._n:
            raise VertexOutOfRangeError(v, self._n)

    def neighbors(self, u: int) -> list[tuple[int, Weight]]:
        """Get (neighbor, weight) pairs in insertion order. O(out-degree)."""
        self.check_vertex(u)
        return list(self._adj[u])

    def edge_list(self) -> list[Edge]:
        """All edges, one entry per ``add_edge`` call."""
        return list(self._edges)

    def undirected_edges(self) -> list[Edge]:
        """Deduplicated ``u < v`` edge set derived from adjacency.

        Parallel edges with the same weight collapse into one; self-loops are
        dropped. Sorted by ``(u, v, weight)``.
        """
        unique: set[tuple[int, int, Weight]] = set()
        for u, entries in enumerate(self._adj):
            for v, w in entries:
                if u < v:
                    unique.add((u, v, w))
        return [Edge(u=u, v=v, weight=w) for u, v, w in sorted(unique)]

    def reversed(self) -> Graph:
        """Graph with every adjacency entry flipped. O(V + E)."""
        rev = Graph(self._n, directed=True)
        for u, entries in enumerate(self._adj):
            for v, w in entries:
                rev._adj[v].append((u, w))
                rev._edges.append(Edge(u=v, v=u, weight=w))
        return rev

    def in_degrees(self) -> list[int]:
        degrees = [0] * self._n
        for entries in self._adj:
            for v, _ in entries:
                degrees[v] += 1
        return degrees

    def out_degree(self, u: int) -> int:
        """Number of adjacency entries. O(1)."""
        self.check_vertex(u)
        return len(self._adj[u])

    @property
    def num_nodes(self) -> int:
        return self._n

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    @property
    def edge_count(self) -> int:
        """Adjacency entries; twice ``num_edges`` for undirected graphs without self-loops."""
        return sum(len(entries) for entries in self._adj)

    @property
    def directed(self) -> bool:
        return self._directed

    def __len__(self) -> int:
        return self._n

    def __repr__(self) -> str:
        kind = "directed" if self._directed else "undirected"
        return f"Graph(nodes={self.num_nodes}, edges={self.num_edges}, {kind})"
