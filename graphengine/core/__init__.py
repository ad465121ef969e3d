"""
Core module: data models, exceptions, and auxiliary structures.

This module provides the foundational types shared by every algorithm:

Models (models.py):
    - Edge: A weighted edge as recorded by Graph.add_edge
    - BFSResult, ShortestPaths, BellmanFordResult: Single-source results
    - AllPairsShortestPaths: Floyd-Warshall matrices
    - ConnectivityReport, SpanningTree: Analysis results

Exceptions (exceptions.py):
    - GraphError: Base exception for all graph engine errors
    - VertexOutOfRangeError: Vertex outside [0, n)
    - InvalidGraphError: Input an algorithm cannot accept
    - NotUndirectedError, DisconnectedGraphError: Spanning tree preconditions

Structures (structures/):
    - UnionFind, LCA, FlowNetwork
"""

from graphengine.core.exceptions import (
    DisconnectedGraphError,
    GraphError,
    InvalidGraphError,
    NotUndirectedError,
    VertexOutOfRangeError,
)
from graphengine.core.models import (
    INF,
    AllPairsShortestPaths,
    BellmanFordResult,
    BFSResult,
    ConnectivityReport,
    Edge,
    ShortestPaths,
    SpanningTree,
    reconstruct_path,
)
from graphengine.core.structures import LCA, FlowNetwork, UnionFind

__all__ = [
    # Models
    "INF",
    "Edge",
    "BFSResult",
    "ShortestPaths",
    "BellmanFordResult",
    "AllPairsShortestPaths",
    "ConnectivityReport",
    "SpanningTree",
    "reconstruct_path",
    # Exceptions
    "GraphError",
    "VertexOutOfRangeError",
    "InvalidGraphError",
    "NotUndirectedError",
    "DisconnectedGraphError",
    # Structures
    "UnionFind",
    "LCA",
    "FlowNetwork",
]
