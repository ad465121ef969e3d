"""Build Graph and FlowNetwork instances from edge tuples or text specs."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from graphengine.core.exceptions import InvalidGraphError
from graphengine.core.graph.base import Graph
from graphengine.core.models import Weight
from graphengine.core.structures.flow import FlowNetwork

EdgeTuple = tuple[int, int, Weight]


def _parse_number(text: str) -> Weight:
    try:
        return int(text)
    except ValueError:
        return float(text)


def _finite_weight(value: Weight) -> Weight:
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidGraphError(f"Edge weight must be finite, got {value}")
    return value


def _vertex(value: Weight) -> int:
    """Vertex id from an int or an integral float such as a JSON ``2.0``."""
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise InvalidGraphError(f"Vertex id must be an integer, got {value!r}")


def parse_edge(spec: str) -> EdgeTuple:
    """Parse ``"u,v"`` or ``"u,v,w"`` (colons also accepted). Weight defaults to 1.

    Weights of ``nan`` or ``inf`` are rejected.
    """
    parts = [p.strip() for p in spec.replace(":", ",").split(",")]
    if len(parts) not in (2, 3) or not all(parts):
        raise InvalidGraphError(f"Edge spec must be 'u,v' or 'u,v,w', got '{spec}'")
    try:
        u, v = int(parts[0]), int(parts[1])
        w = _parse_number(parts[2]) if len(parts) == 3 else 1
    except ValueError:
        raise InvalidGraphError(f"Edge spec has a non-numeric field: '{spec}'") from None
    return (u, v, _finite_weight(w))


def _normalize(edge: Sequence[Weight]) -> EdgeTuple:
    if len(edge) == 2:
        return (_vertex(edge[0]), _vertex(edge[1]), 1)
    if len(edge) == 3:
        return (_vertex(edge[0]), _vertex(edge[1]), _finite_weight(edge[2]))
    raise InvalidGraphError(f"Edge must have 2 or 3 fields, got {list(edge)}")


def build_graph(
    n: int,
    edges: Iterable[Sequence[Weight] | str],
    directed: bool = False,
) -> Graph:
    """Create a graph and add every edge in order. O(V + E).

    Edges are ``(u, v)``, ``(u, v, w)`` or text specs accepted by parse_edge.
    """
    graph = Graph(n, directed=directed)
    for i, edge in enumerate(edges):
        u, v, w = parse_edge(edge) if isinstance(edge, str) else _normalize(edge)
        graph.add_edge(u, v, w, id=i)
    return graph


def build_tree(n: int, edges: Iterable[Sequence[Weight] | str]) -> list[list[int]]:
    """Undirected neighbor lists for LCA preprocessing. Weights are ignored."""
    return [[v for v, _ in entries] for entries in build_graph(n, edges)._adj]


def build_flow_network(n: int, arcs: Iterable[Sequence[Weight] | str]) -> FlowNetwork:
    """Flow network whose third field is the arc capacity (default 1)."""
    network = FlowNetwork(n)
    for arc in arcs:
        u, v, capacity = parse_edge(arc) if isinstance(arc, str) else _normalize(arc)
        if capacity != int(capacity):
            raise InvalidGraphError(f"Capacity must be an integer, got {capacity}")
        network.add_arc(u, v, int(capacity))
    return network
