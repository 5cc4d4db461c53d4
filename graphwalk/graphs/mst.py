"""
Minimum spanning tree algorithms: Kruskal and Prim.

Kruskal uses the disjoint-set structure. Prim uses the priority frontier with
lazy deletion of edges whose far end already joined the tree.

On a disconnected graph both report a PartialSpanningForest instead of
passing an incomplete tree off as a spanning one.

References:
    - Cormen, Leiserson, Rivest, Stein. "Introduction to Algorithms", 3rd ed.
      Chapters 23.1 (MST properties), 23.2 (Kruskal), 23.2 (Prim).
"""

from typing import FrozenSet, Iterator, List, Optional, Set

from ..diagnostics import assert_spanning_edges, is_debug_enabled
from ..logging import get_logger
from .core import Edge, GraphModel, _as_node
from .disjoint_set import DisjointSet
from .frontier import FrontierEntry, PriorityFrontier
from .results import PartialSpanningForest, SpanningResult, SpanningTree
from .stepper import StepKind, StepOutcome, Stepper

logger = get_logger(__name__)


def _require_undirected(graph: GraphModel, algorithm: str) -> None:
    if graph.directed:
        raise ValueError(f"{algorithm} requires an undirected graph")


def _spanning_result(
    graph: GraphModel, edges: List[Edge], spanned: FrozenSet[int], algorithm: str
) -> SpanningResult:
    if is_debug_enabled():
        assert_spanning_edges(graph, edges, spanned)

    if len(spanned) == graph.node_count() and len(edges) == max(graph.node_count() - 1, 0):
        return SpanningTree(tuple(edges))

    forest = PartialSpanningForest(tuple(edges), spanned)
    logger.info(
        "%s: graph is disconnected, %d edges span %d of %d nodes in %d components",
        algorithm,
        len(edges),
        len(spanned),
        graph.node_count(),
        forest.component_count,
    )
    return forest


class KruskalStepper(Stepper[SpanningResult]):
    """
    Kruskal's algorithm, one candidate edge per step (ACCEPT or REJECT).

    Attributes:
        graph: Undirected graph.
        sorted_edges: Edges by ascending weight, ties in insertion order.
        disjoint_set: Live component structure.
        edges: Accepted edges so far.
        cursor: Number of candidate edges examined.
    """

    def __init__(self, graph: GraphModel):
        super().__init__()
        _require_undirected(graph, "Kruskal")
        self.graph = graph
        # sorted() is stable, so equal weights keep insertion order
        self.sorted_edges = tuple(sorted(graph.edges(), key=lambda e: e.weight))
        self.disjoint_set = DisjointSet(graph.node_count())
        self.edges: List[Edge] = []
        self.cursor = 0

    def _run(self) -> Iterator[StepOutcome]:
        n = self.graph.node_count()
        needed = max(n - 1, 0)

        for edge in self.sorted_edges:
            if len(self.edges) >= needed:
                break
            self.cursor += 1
            if self.disjoint_set.union(edge.source, edge.target):
                self.edges.append(edge)
                yield StepOutcome(StepKind.ACCEPT, node=edge.target, edge=edge)
            else:
                yield StepOutcome(StepKind.REJECT, node=edge.target, edge=edge)

        self._result = _spanning_result(self.graph, self.edges, frozenset(range(n)), "kruskal")


def kruskal_mst(graph: GraphModel) -> SpanningResult:
    """
    Kruskal's algorithm for minimum spanning tree.

    Considers edges by ascending weight (ties in insertion order) and accepts
    each edge whose endpoints lie in different components, stopping after
    ``node_count - 1`` acceptances.

    Args:
        graph: Undirected GraphModel.

    Returns:
        SpanningTree with edges in acceptance order, or PartialSpanningForest
        (one tree per component) if graph is disconnected.

    Raises:
        ValueError: If graph is directed.

    Complexity: O(E log E) = O(E log V) for sorting and union-find operations.

    Example:
        >>> G = GraphModel(3, [(0, 1, 1), (1, 2, 2), (0, 2, 3)], directed=False)
        >>> kruskal_mst(G).total_weight
        3
    """
    return KruskalStepper(graph).run()


class PrimStepper(Stepper[SpanningResult]):
    """
    Prim's algorithm, one frontier pop per step.

    The first step visits the start node (POP). Every later step pops the
    lightest crossing edge: ACCEPT if its target is new, STALE if the target
    joined the tree in the meantime. Accepting a node pushes its edges to
    unvisited nodes.

    Attributes:
        graph: Undirected graph.
        start: Root of the tree.
        visited: Nodes in the tree.
        frontier: Live frontier of ``(weight, edge)`` entries, ties broken
            by ``(from, to)``.
        edges: Accepted edges so far.
        current: Node most recently added to the tree.
    """

    def __init__(self, graph: GraphModel, start: Optional[int] = None):
        super().__init__()
        _require_undirected(graph, "Prim")
        self.graph = graph
        if start is None:
            self.start: Optional[int] = 0 if graph.node_count() else None
        else:
            self.start = _as_node(start, graph.node_count())

        self.visited: Set[int] = set()
        self.frontier: PriorityFrontier[Edge] = PriorityFrontier()
        self.edges: List[Edge] = []
        self.current: Optional[int] = None

    def frontier_contents(self) -> List[FrontierEntry]:
        return self.frontier.contents()

    def _visit(self, node: int) -> None:
        self.visited.add(node)
        self.current = node
        for edge in self.graph.neighbors(node):
            if edge.target not in self.visited:
                self.frontier.push(edge.weight, edge, tie_key=(edge.source, edge.target))

    def _run(self) -> Iterator[StepOutcome]:
        n = self.graph.node_count()
        if self.start is not None:
            self._visit(self.start)
            yield StepOutcome(StepKind.POP, node=self.start)

        while self.frontier and len(self.visited) < n:
            _, edge = self.frontier.pop()
            if edge.target in self.visited:
                yield StepOutcome(StepKind.STALE, node=edge.target, edge=edge)
                continue
            self.edges.append(edge)
            self._visit(edge.target)
            yield StepOutcome(StepKind.ACCEPT, node=edge.target, edge=edge)

        self._result = _spanning_result(self.graph, self.edges, frozenset(self.visited), "prim")


def prim_mst(graph: GraphModel, start: Optional[int] = None) -> SpanningResult:
    """
    Prim's algorithm for minimum spanning tree.

    Uses priority queue to greedily add minimum-weight edges connecting
    tree to non-tree vertices.

    Args:
        graph: Undirected GraphModel.
        start: Starting node (defaults to node 0).

    Returns:
        SpanningTree with edges in acceptance order, or PartialSpanningForest
        covering only the component of start if graph is disconnected.

    Raises:
        ValueError: If graph is directed.
        InvalidNode: If start is not in graph.

    Complexity: O(E log E) using binary heap with lazy deletion.

    Example:
        >>> G = GraphModel(3, [(0, 1, 1), (1, 2, 2)], directed=False)
        >>> prim_mst(G, 0).edges
        (Edge(source=0, target=1, weight=1), Edge(source=1, target=2, weight=2))
    """
    return PrimStepper(graph, start).run()
