"""Graph engine custom exceptions."""


class GraphError(Exception):
    """Base exception for graph engine errors."""


class VertexOutOfRangeError(GraphError, IndexError):
    """Vertex identifier outside the graph's ``[0, n)`` range."""

    def __init__(self, vertex: int, size: int) -> None:
        super().__init__(f"Vertex {vertex} out of range [0, {size})")
        self.vertex = vertex
        self.size = size


class InvalidGraphError(GraphError, ValueError):
    """Graph, edge or query input that an algorithm cannot accept."""


class NotUndirectedError(GraphError):
    """Algorithm requires an undirected graph."""


class DisconnectedGraphError(GraphError):
    """Spanning tree cannot be assembled because the graph is disconnected."""
