"""
Auxiliary structures independent of the weighted Graph.

Components:
    - UnionFind: Disjoint sets with path compression and union by rank
    - LCA: Binary-lifting ancestor table over a rooted tree
    - FlowNetwork: Residual arc arena with Dinic max-flow
"""

from graphengine.core.structures.flow import Arc, FlowNetwork
from graphengine.core.structures.lca import LCA
from graphengine.core.structures.union_find import UnionFind

__all__ = [
    "Arc",
    "FlowNetwork",
    "LCA",
    "UnionFind",
]
