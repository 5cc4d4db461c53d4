"""
Disjoint-set (union-find) with union by rank and path compression.

The two optimizations together bound the amortized cost of a sequence of
operations by the inverse Ackermann function. Parent and rank live in numpy
integer arrays indexed by node.

References:
    - Cormen, Leiserson, Rivest, Stein. "Introduction to Algorithms", 3rd ed.
      Chapter 21.3 (Disjoint-set forests).
"""

from typing import TYPE_CHECKING, Dict, List

import numpy as np

from ..diagnostics import assert_disjoint_set_acyclic, is_debug_enabled
from .core import _as_node

if TYPE_CHECKING:
    from .core import GraphModel


class DisjointSet:
    """
    Union-Find (Disjoint Set) data structure over nodes ``0 .. size - 1``.

    Used by Kruskal's algorithm and connected_components.

    Example:
        >>> ds = DisjointSet(4)
        >>> ds.union(0, 1)
        True
        >>> ds.union(1, 0)
        False
        >>> ds.find(1) == ds.find(0)
        True
    """

    def __init__(self, size: int):
        """
        Initialize every node as its own singleton set.

        Args:
            size: Number of nodes.
        """
        if size < 0:
            raise ValueError(f"DisjointSet size must be non-negative, got {size}")
        self._parent = np.arange(size, dtype=np.int64)
        self._rank = np.zeros(size, dtype=np.int64)
        self._components = int(size)

    def __len__(self) -> int:
        return len(self._parent)

    @property
    def component_count(self) -> int:
        """Number of disjoint sets."""
        return self._components

    def find(self, x: int) -> int:
        """
        Find root of x with path compression.

        Every node on the path from x to the root is repointed directly at
        the root.

        Args:
            x: Node to find root for.

        Returns:
            Root node.

        Raises:
            InvalidNode: If x is out of range.
        """
        x = _as_node(x, len(self._parent))
        parent = self._parent

        root = x
        while parent[root] != root:
            root = int(parent[root])

        while parent[x] != root:
            parent[x], x = root, int(parent[x])

        return root

    def union(self, x: int, y: int) -> bool:
        """
        Union sets containing x and y using union by rank.

        The lower-rank root goes under the higher-rank one. On equal rank the
        root of y goes under the root of x, whose rank grows by one.

        Args:
            x: First node.
            y: Second node.

        Returns:
            True if union was performed (x and y were in different sets),
            False if they were already in the same set.
        """
        root_x = self.find(x)
        root_y = self.find(y)

        if root_x == root_y:
            return False

        if self._rank[root_x] < self._rank[root_y]:
            self._parent[root_x] = root_y
        elif self._rank[root_x] > self._rank[root_y]:
            self._parent[root_y] = root_x
        else:
            self._parent[root_y] = root_x
            self._rank[root_x] += 1

        self._components -= 1

        if is_debug_enabled():
            assert_disjoint_set_acyclic(self)
            if self.find(x) != self.find(y):
                raise ValueError(f"Union of {x} and {y} left them in different sets.")

        return True

    def connected(self, x: int, y: int) -> bool:
        """Return True if x and y are in the same set."""
        return self.find(x) == self.find(y)

    def groups(self) -> List[List[int]]:
        """
        Return the members of every set.

        Groups are sorted internally and ordered by their smallest member.
        """
        members: Dict[int, List[int]] = {}
        for node in range(len(self._parent)):
            members.setdefault(self.find(node), []).append(node)
        return sorted(members.values(), key=lambda group: group[0])

    def parents(self) -> np.ndarray:
        """Return a copy of the parent array."""
        return self._parent.copy()

    def ranks(self) -> np.ndarray:
        """Return a copy of the rank array."""
        return self._rank.copy()

    def __repr__(self) -> str:
        return f"DisjointSet(size={len(self)}, components={self._components})"


def connected_components(graph: "GraphModel") -> List[List[int]]:
    """
    Group the nodes of a graph into weakly connected components.

    Arc direction is ignored. Components are sorted internally and ordered by
    their smallest node.

    Args:
        graph: Graph to partition.

    Returns:
        List of node lists, one per component.

    Complexity: O((V + E) α(V)).

    Example:
        >>> from graphwalk.graphs import GraphModel
        >>> connected_components(GraphModel(4, [(0, 1), (2, 3)], directed=False))
        [[0, 1], [2, 3]]
    """
    ds = DisjointSet(graph.node_count())
    for edge in graph.edges():
        ds.union(edge.source, edge.target)
    return ds.groups()
