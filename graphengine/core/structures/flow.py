"""Dinic maximum flow over an arena of residual arcs."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass

from graphengine.core.exceptions import InvalidGraphError, VertexOutOfRangeError

logger = logging.getLogger(__name__)


@dataclass
class Arc:
    """A residual arc. ``rev`` indexes the paired arc in the same arena."""

    to: int
    capacity: int
    residual: int
    rev: int


class FlowNetwork:
    """Directed network with integer capacities.

    Every ``add_arc`` appends the forward arc and its zero-capacity reverse arc
    as adjacent arena slots. ``maxflow`` consumes residual capacity, so a
    second call on the same pair returns only flow not yet routed.
    """

    __slots__ = ("_n", "_arcs", "_adj")

    def __init__(self, n: int) -> None:
        if n < 0:
            raise InvalidGraphError(f"Vertex count must be non-negative, got {n}")
        self._n = n
        self._arcs: list[Arc] = []
        self._adj: list[list[int]] = [[] for _ in range(n)]

    def _check(self, v: int) -> None:
        if not 0 <= v < self._n:
            raise VertexOutOfRangeError(v, self._n)

    def add_arc(self, u: int, v: int, capacity: int) -> int:
        """Add arc u -> v and its reverse. Returns the forward arc's index."""
        self._check(u)
        self._check(v)
        if not isinstance(capacity, int):
            raise InvalidGraphError(f"Capacity must be an integer, got {capacity!r}")
        if capacity < 0:
            raise InvalidGraphError(f"Capacity must be non-negative, got {capacity}")
        index = len(self._arcs)
        self._arcs.append(Arc(to=v, capacity=capacity, residual=capacity, rev=index + 1))
        self._arcs.append(Arc(to=u, capacity=0, residual=0, rev=index))
        self._adj[u].append(index)
        self._adj[v].append(index + 1)
        return index

    def _build_levels(self, source: int, sink: int, level: list[int]) -> bool:
        """Fill BFS layer numbers over positive-residual arcs. True if sink is reached."""
        for i in range(self._n):
            level[i] = -1
        level[source] = 0
        queue: deque[int] = deque([source])
        while queue:
            u = queue.popleft()
            for a in self._adj[u]:
                arc = self._arcs[a]
                if arc.residual > 0 and level[arc.to] == -1:
                    level[arc.to] = level[u] + 1
                    queue.append(arc.to)
        return level[sink] != -1

    def _blocking_flow(
        self, source: int, sink: int, level: list[int], cursor: list[int]
    ) -> int:
        """Push flow along level-advancing arcs until none is left.

        The search keeps the current path as a stack of arc indices. Each
        vertex's cursor only moves forward within a phase.
        """
        arcs = self._arcs
        path: list[int] = []
        pushed = 0
        u = source

        while True:
            if u == sink:
                bottleneck = min(arcs[a].residual for a in path)
                for a in path:
                    arcs[a].residual -= bottleneck
                    arcs[arcs[a].rev].residual += bottleneck
                pushed += bottleneck
                saturated = next(i for i, a in enumerate(path) if arcs[a].residual == 0)
                del path[saturated:]
                u = arcs[path[-1]].to if path else source
                continue

            adj = self._adj[u]
            advanced = False
            while cursor[u] < len(adj):
                arc = arcs[adj[cursor[u]]]
                if arc.residual > 0 and level[arc.to] == level[u] + 1:
                    path.append(adj[cursor[u]])
                    u = arc.to
                    advanced = True
                    break
                cursor[u] += 1
            if advanced:
                continue

            # dead end
            if u == source:
                return pushed
            a = path.pop()
            u = arcs[arcs[a].rev].to
            cursor[u] += 1

    def maxflow(self, source: int, sink: int) -> int:
        """Total flow from source to sink. O(V^2 * E)."""
        self._check(source)
        self._check(sink)
        if source == sink:
            raise InvalidGraphError("Source and sink must differ")

        level = [-1] * self._n
        flow = 0
        phases = 0
        while self._build_levels(source, sink, level):
            phases += 1
            cursor = [0] * self._n
            flow += self._blocking_flow(source, sink, level, cursor)
        logger.debug(f"Dinic finished in {phases} phases with flow {flow}")
        return flow

    def flow_on(self, arc: int) -> int:
        """Flow currently routed through a forward arc returned by add_arc."""
        a = self._arcs[arc]
        return a.capacity - a.residual

    def min_cut(self, source: int) -> list[int]:
        """Vertices reachable from source in the residual network.

        After ``maxflow`` this is the source side of a minimum cut.
        """
        self._check(source)
        seen = [False] * self._n
        seen[source] = True
        queue: deque[int] = deque([source])
        while queue:
            u = queue.popleft()
            for a in self._adj[u]:
                arc = self._arcs[a]
                if arc.residual > 0 and not seen[arc.to]:
                    seen[arc.to] = True
                    queue.append(arc.to)
        return [v for v in range(self._n) if seen[v]]

    @property
    def num_nodes(self) -> int:
        return self._n

    @property
    def num_arcs(self) -> int:
        """Forward arcs added; the arena holds twice as many."""
        return len(self._arcs) // 2

    def __repr__(self) -> str:
        return f"FlowNetwork(nodes={self._n}, arcs={self.num_arcs})"
