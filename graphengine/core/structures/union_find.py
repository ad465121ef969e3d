"""Disjoint-set forest with path compression and union by rank."""

from __future__ import annotations


class UnionFind:
    """Partition of ``[0, n)`` into disjoint sets.

    Parent and rank are plain index arrays addressed by element id.
    """

    __slots__ = ("_parent", "_rank", "_size", "_sets")

    def __init__(self, n: int) -> None:
        self._parent = list(range(n))
        self._rank = [0] * n
        self._size = [1] * n
        self._sets = n

    def find(self, x: int) -> int:
        """Root of x's set, halving the path on the way. Amortized O(alpha(n))."""
        parent = self._parent
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    def union(self, a: int, b: int) -> bool:
        """Merge the sets of a and b. Returns False if they were already joined."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self._rank[ra] < self._rank[rb]:
            ra, rb = rb, ra
        self._parent[rb] = ra
        self._size[ra] += self._size[rb]
        if self._rank[ra] == self._rank[rb]:
            self._rank[ra] += 1
        self._sets -= 1
        return True

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)

    def set_size(self, x: int) -> int:
        return self._size[self.find(x)]

    @property
    def num_sets(self) -> int:
        return self._sets

    def __len__(self) -> int:
        return len(self._parent)

    def __repr__(self) -> str:
        return f"UnionFind(elements={len(self)}, sets={self.num_sets})"
