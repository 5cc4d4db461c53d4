"""Structural invariant checks for graphs and algorithm results.

These helpers are duck-typed against the graph model and disjoint-set
interfaces so that the graph modules can call them without import cycles.
They run automatically when debug mode is enabled.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Sequence

if TYPE_CHECKING:
    from ..graphs.core import Edge, GraphModel
    from ..graphs.disjoint_set import DisjointSet


def is_adjacency_consistent(graph: "GraphModel") -> bool:
    """
    Check that an undirected graph stores every arc in both directions.

    Directed graphs are always consistent.

    Parameters
    ----------
    graph:
        Graph to inspect.

    Returns
    -------
    bool
        True if each arc (u, v, w) has a mirror (v, u, w).
    """
    if graph.directed:
        return True

    for edge in graph.arcs():
        if graph.weight(edge.target, edge.source) != edge.weight:
            return False
    return True


def assert_adjacency_consistent(graph: "GraphModel") -> None:
    """
    Assert that an undirected graph has symmetric adjacency.

    Raises
    ------
    ValueError
        If some arc has no mirror arc of equal weight.
    """
    if not is_adjacency_consistent(graph):
        raise ValueError("Undirected graph adjacency is not symmetric.")


def assert_disjoint_set_acyclic(dsu: "DisjointSet") -> None:
    """
    Assert that parent pointers of a disjoint set form a forest.

    Walks every node to its root without path compression and fails if a
    walk is longer than the number of nodes.

    Raises
    ------
    ValueError
        If a parent chain does not terminate.
    """
    parents = dsu.parents()
    n = len(parents)
    for start in range(n):
        node = start
        for _ in range(n + 1):
            if parents[node] == node:
                break
            node = int(parents[node])
        else:
            raise ValueError(f"Parent chain from node {start} does not reach a root.")


def assert_topological_order(graph: "GraphModel", order: Sequence[int]) -> None:
    """
    Assert that order lists every node once and respects every arc.

    Raises
    ------
    ValueError
        If a node is missing or repeated, or an arc (u, v) has v before u.
    """
    if sorted(order) != list(graph.nodes()):
        raise ValueError("Topological order must contain every node exactly once.")

    position = {node: idx for idx, node in enumerate(order)}
    for edge in graph.arcs():
        if position[edge.source] >= position[edge.target]:
            raise ValueError(
                f"Edge ({edge.source}, {edge.target}) violates topological order."
            )


def assert_spanning_edges(
    graph: "GraphModel", edges: Iterable["Edge"], spanned: Iterable[int]
) -> None:
    """
    Assert that an accepted edge set is a spanning forest of ``spanned``.

    The edges must stay inside ``spanned``, contain no cycle, and join every
    pair of spanned nodes that some graph edge joins. Together these make
    the edge count exactly ``len(spanned)`` minus the number of connected
    components the graph has over the spanned nodes.

    Parameters
    ----------
    graph:
        Undirected graph the edges were taken from.
    edges:
        Accepted edges.
    spanned:
        Nodes the forest claims to cover.

    Raises
    ------
    ValueError
        If an edge leaves ``spanned``, an edge closes a cycle, or the forest
        leaves two graph-adjacent spanned nodes in different trees.
    """
    covered = set(spanned)
    parent = list(graph.nodes())

    def root(x: int) -> int:
        while parent[x] != x:
            x = parent[x]
        return x

    for edge in edges:
        if edge.source not in covered or edge.target not in covered:
            raise ValueError(
                f"Spanning edge ({edge.source}, {edge.target}) leaves the spanned nodes."
            )
        ru, rv = root(edge.source), root(edge.target)
        if ru == rv:
            raise ValueError(
                f"Spanning edge ({edge.source}, {edge.target}) closes a cycle."
            )
        parent[rv] = ru

    for arc in graph.arcs():
        if arc.source in covered and arc.target in covered:
            if root(arc.source) != root(arc.target):
                raise ValueError(
                    f"Spanning forest leaves nodes {arc.source} and {arc.target} "
                    "in different trees."
                )
