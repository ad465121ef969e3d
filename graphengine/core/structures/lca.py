"""Lowest common ancestor queries by binary lifting."""

from __future__ import annotations

from collections.abc import Sequence

from graphengine.core.exceptions import InvalidGraphError, VertexOutOfRangeError


class LCA:
    """Ancestor table over a rooted tree.

    ``up[k][v]`` is the 2^k-th ancestor of v, or -1 past the root. Vertices
    not connected to the root have no ancestors and no common ancestor with
    anything.
    """

    __slots__ = ("_n", "_root", "_levels", "_depth", "_up", "_reached")

    def __init__(self, n: int, root: int = 0) -> None:
        self._n = n
        self._root = root
        self._levels = (n - 1).bit_length() + 1 if n > 0 else 1
        self._depth = [0] * n
        self._up = [[-1] * n for _ in range(self._levels)]
        self._reached = [False] * n

    @classmethod
    def build_from_tree(cls, tree: Sequence[Sequence[int]], root: int = 0) -> LCA:
        """Preprocess a tree given as neighbor (or children) lists. O(n log n).

        The walk from root is iterative, so tree height is not bounded by the
        interpreter's recursion limit.
        """
        n = len(tree)
        lca = cls(n, root)
        if n == 0:
            return lca
        lca._check(root)

        up0 = lca._up[0]
        lca._reached[root] = True
        stack = [root]
        while stack:
            u = stack.pop()
            for v in tree[u]:
                lca._check(v)
                if not lca._reached[v]:
                    lca._reached[v] = True
                    up0[v] = u
                    lca._depth[v] = lca._depth[u] + 1
                    stack.append(v)

        for k in range(1, lca._levels):
            prev, cur = lca._up[k - 1], lca._up[k]
            for v in range(n):
                mid = prev[v]
                cur[v] = -1 if mid == -1 else prev[mid]

        return lca

    def _check(self, v: int) -> None:
        if not 0 <= v < self._n:
            raise VertexOutOfRangeError(v, self._n)

    def depth(self, v: int) -> int:
        self._check(v)
        return self._depth[v]

    def kth_ancestor(self, v: int, k: int) -> int | None:
        """Lift v by k steps, one table level per set bit of k. O(log n).

        Returns None when k exceeds v's depth.
        """
        self._check(v)
        if k < 0:
            raise InvalidGraphError(f"Ancestor distance must be non-negative, got {k}")
        if not self._reached[v] or k > self._depth[v]:
            return None
        level = 0
        while k:
            if k & 1:
                v = self._up[level][v]
            k >>= 1
            level += 1
        return v

    def query(self, a: int, b: int) -> int | None:
        """Lowest common ancestor of a and b. O(log n)."""
        self._check(a)
        self._check(b)
        if not (self._reached[a] and self._reached[b]):
            return None
        if self._depth[a] < self._depth[b]:
            a, b = b, a

        diff = self._depth[a] - self._depth[b]
        for k in range(self._levels):
            if diff >> k & 1:
                a = self._up[k][a]
        if a == b:
            return a

        for k in reversed(range(self._levels)):
            if self._up[k][a] != self._up[k][b]:
                a = self._up[k][a]
                b = self._up[k][b]
        return self._up[0][a]

    def distance(self, a: int, b: int) -> int | None:
        """Edge count of the tree path between a and b."""
        ancestor = self.query(a, b)
        if ancestor is None:
            return None
        return self._depth[a] + self._depth[b] - 2 * self._depth[ancestor]

    @property
    def root(self) -> int:
        return self._root

    def __len__(self) -> int:
        return self._n

    def __repr__(self) -> str:
        return f"LCA(nodes={self._n}, root={self._root}, levels={self._levels})"
