"""
Single-source shortest path algorithms: Dijkstra, A* and Bellman-Ford.

Dijkstra's algorithm and A* for non-negative edge weights.
Bellman-Ford algorithm for graphs with negative weights (detects negative cycles).

Dijkstra and A* keep a PriorityFrontier with lazy deletion: an improved
distance pushes a new entry, and entries whose priority is worse than the
distance table are discarded when popped.

References:
    - Cormen, Leiserson, Rivest, Stein. "Introduction to Algorithms", 3rd ed.
      Chapters 24.3 (Dijkstra) and 24.1 (Bellman-Ford).
    - Hart, Nilsson, Raphael. "A Formal Basis for the Heuristic Determination
      of Minimum Cost Paths", 1968.
"""

from typing import Iterator, List, Optional, Set

from ..logging import get_logger
from .core import Edge, GraphModel, _as_node
from .errors import NegativeWeightError
from .frontier import FrontierEntry, PriorityFrontier
from .results import (
    UNREACHABLE,
    DistanceTable,
    Distances,
    NegativeCycleDetected,
    PathResult,
    ShortestPathResult,
)
from .stepper import StepKind, StepOutcome, Stepper
from .utils import Heuristic, zero_heuristic

logger = get_logger(__name__)


def _require_non_negative(graph: GraphModel, algorithm: str) -> None:
    for edge in graph.edges():
        if edge.weight < 0:
            raise NegativeWeightError(
                f"{algorithm} requires non-negative weights. "
                f"Found negative weight {edge.weight} on edge ({edge.source}, {edge.target})"
            )


class DijkstraStepper(Stepper[Distances]):
    """
    Dijkstra's algorithm, one unit of work per step.

    A step either pops a frontier entry (POP, or STALE when it is outdated)
    or examines one outgoing edge of the current node (RELAX or SKIP).

    Attributes:
        graph: Graph being searched.
        source: Start node.
        table: Live distance table.
        frontier: Live frontier of ``(distance, node)`` entries.
        visited: Nodes whose distance is final.
        current: Node whose edges are being relaxed, if any.
    """

    def __init__(self, graph: GraphModel, source: int):
        super().__init__()
        self.graph = graph
        self.source = _as_node(source, graph.node_count())
        _require_non_negative(graph, "Dijkstra")

        self.table = DistanceTable(graph.node_count(), self.source)
        self.frontier: PriorityFrontier[int] = PriorityFrontier()
        self.visited: Set[int] = set()
        self.current: Optional[int] = None

    def frontier_contents(self) -> List[FrontierEntry]:
        return self.frontier.contents()

    def _run(self) -> Iterator[StepOutcome]:
        logger.debug("dijkstra: source=%d nodes=%d", self.source, self.graph.node_count())
        self.table._update(self.source, 0)
        self.frontier.push(0, self.source, tie_key=self.source)

        while self.frontier:
            d, u = self.frontier.pop()
            if d > self.table._get(u):
                yield StepOutcome(StepKind.STALE, node=u)
                continue

            self.current = u
            self.visited.add(u)
            yield StepOutcome(StepKind.POP, node=u)

            for edge in self.graph.neighbors(u):
                candidate = d + edge.weight
                best = self.table._get(edge.target)
                if best is not None and candidate >= best:
                    yield StepOutcome(StepKind.SKIP, node=edge.target, edge=edge)
                    continue
                self.table._update(edge.target, candidate, u)
                self.frontier.push(candidate, edge.target, tie_key=edge.target)
                yield StepOutcome(StepKind.RELAX, node=edge.target, edge=edge)

        self.current = None
        logger.debug("dijkstra: reached %d of %d nodes", len(self.table), self.graph.node_count())
        self._result = Distances(self.table)


def dijkstra(graph: GraphModel, source: int) -> Distances:
    """
    Dijkstra's algorithm for single-source shortest paths.

    Computes shortest paths from source to all reachable nodes in a graph
    with non-negative edge weights.

    Args:
        graph: GraphModel with non-negative edge weights.
        source: Source node.

    Returns:
        Distances wrapping the final DistanceTable. Unreached nodes report
        UNREACHABLE and no predecessor.

    Raises:
        InvalidNode: If source is not in graph.
        NegativeWeightError: If graph contains negative edge weights.

    Complexity: O(E log E) using a binary heap with lazy deletion.

    Example:
        >>> G = GraphModel(3, [(0, 1, 1), (1, 2, 2), (0, 2, 5)])
        >>> result = dijkstra(G, 0)
        >>> result.distance(2)
        3
        >>> result.path_to(2)
        (0, 1, 2)
    """
    return DijkstraStepper(graph, source).run()


class AStarStepper(Stepper[PathResult]):
    """
    A* search toward a single goal, one unit of work per step.

    Frontier priority is ``g(node) + heuristic(node, goal)`` with ties broken
    by node index. The search ends when the goal is popped as an
    authoritative entry or the frontier empties.

    Attributes:
        graph: Graph being searched.
        source: Start node.
        goal: Target node.
        table: Live table of best-known path costs ``g``.
        frontier: Live frontier of ``(f, (node, g))`` entries.
        closed: Nodes expanded so far.
        current: Node whose edges are being relaxed, if any.
    """

    def __init__(
        self,
        graph: GraphModel,
        source: int,
        goal: int,
        heuristic: Optional[Heuristic] = None,
    ):
        super().__init__()
        self.graph = graph
        self.source = _as_node(source, graph.node_count())
        self.goal = _as_node(goal, graph.node_count())
        self.heuristic = heuristic or zero_heuristic
        _require_non_negative(graph, "A*")

        self.table = DistanceTable(graph.node_count(), self.source)
        self.frontier: PriorityFrontier = PriorityFrontier()
        self.closed: Set[int] = set()
        self.current: Optional[int] = None
        self.expanded = 0

    def frontier_contents(self) -> List[FrontierEntry]:
        return self.frontier.contents()

    def _push(self, node: int, g: int) -> None:
        self.frontier.push(g + self.heuristic(node, self.goal), (node, g), tie_key=node)

    def _run(self) -> Iterator[StepOutcome]:
        logger.debug("astar: source=%d goal=%d", self.source, self.goal)
        self.table._update(self.source, 0)
        self._push(self.source, 0)
        reached_goal = False

        while self.frontier:
            _, (u, g) = self.frontier.pop()
            if g > self.table._get(u):
                yield StepOutcome(StepKind.STALE, node=u)
                continue

            self.current = u
            self.closed.add(u)
            self.expanded += 1
            yield StepOutcome(StepKind.POP, node=u)

            if u == self.goal:
                reached_goal = True
                break

            for edge in self.graph.neighbors(u):
                candidate = g + edge.weight
                best = self.table._get(edge.target)
                if best is not None and candidate >= best:
                    yield StepOutcome(StepKind.SKIP, node=edge.target, edge=edge)
                    continue
                self.table._update(edge.target, candidate, u)
                self._push(edge.target, candidate)
                yield StepOutcome(StepKind.RELAX, node=edge.target, edge=edge)

        self.current = None
        if reached_goal:
            path = self.table.path_to(self.goal)
            cost = self.table.distance(self.goal)
        else:
            path, cost = (), UNREACHABLE
        logger.debug("astar: goal %s after %d expansions", "found" if reached_goal else "unreachable", self.expanded)
        self._result = PathResult(
            source=self.source,
            goal=self.goal,
            path=path,
            cost=cost,
            table=self.table,
            expanded=self.expanded,
        )


def astar(
    graph: GraphModel,
    source: int,
    goal: int,
    heuristic: Optional[Heuristic] = None,
) -> PathResult:
    """
    A* search for a shortest path from source to goal.

    The result is optimal when ``heuristic`` is admissible, i.e. never
    overestimates the remaining cost. Manhattan distance
    (``manhattan_heuristic``) is admissible on uniform grids.

    Args:
        graph: GraphModel with non-negative edge weights.
        source: Start node.
        goal: Target node.
        heuristic: Callable ``h(node, goal)``; defaults to zero, which makes
            the search expand nodes in Dijkstra order.

    Returns:
        PathResult with the node path and its cost. ``path`` is empty and
        ``cost`` is UNREACHABLE if goal cannot be reached.

    Raises:
        InvalidNode: If source or goal is not in graph.
        NegativeWeightError: If graph contains negative edge weights.

    Example:
        >>> grid = GridGraph.from_strings(["...", ".#.", "..."])
        >>> result = astar(grid, 0, 8, manhattan_heuristic(grid))
        >>> result.cost
        4
    """
    return AStarStepper(graph, source, goal, heuristic).run()


class BellmanFordStepper(Stepper[ShortestPathResult]):
    """
    Bellman-Ford algorithm, one edge relaxation attempt per step.

    Runs up to ``node_count - 1`` passes over ``graph.arcs()`` (stopping early
    once a pass changes nothing, each finished pass yields a PASS step), then
    one detection pass. Any relaxation in the detection pass proves a
    negative cycle reachable from the source.

    Attributes:
        graph: Graph being searched.
        source: Start node.
        table: Live distance table.
        passes: Relaxation passes completed, detection pass included.
        current_edge: Edge examined by the latest step.
    """

    def __init__(self, graph: GraphModel, source: int):
        super().__init__()
        self.graph = graph
        self.source = _as_node(source, graph.node_count())
        self.table = DistanceTable(graph.node_count(), self.source)
        self.passes = 0
        self.current_edge: Optional[Edge] = None

    def _relax(self, edge: Edge) -> StepOutcome:
        self.current_edge = edge
        start = self.table._get(edge.source)
        if start is None:
            return StepOutcome(StepKind.SKIP, node=edge.target, edge=edge)
        candidate = start + edge.weight
        best = self.table._get(edge.target)
        if best is not None and candidate >= best:
            return StepOutcome(StepKind.SKIP, node=edge.target, edge=edge)
        self.table._update(edge.target, candidate, edge.source)
        return StepOutcome(StepKind.RELAX, node=edge.target, edge=edge)

    def _run(self) -> Iterator[StepOutcome]:
        n = self.graph.node_count()
        arcs = self.graph.arcs()
        logger.debug("bellman_ford: source=%d nodes=%d arcs=%d", self.source, n, len(arcs))
        self.table._update(self.source, 0)

        converged = False
        for _ in range(n - 1):
            changed = False
            for edge in arcs:
                outcome = self._relax(edge)
                changed = changed or outcome.kind is StepKind.RELAX
                yield outcome
            self.passes += 1
            yield StepOutcome(StepKind.PASS)
            if not changed:
                converged = True
                break

        last_relaxed: Optional[int] = None
        if not converged:
            for edge in arcs:
                outcome = self._relax(edge)
                if outcome.kind is StepKind.RELAX:
                    last_relaxed = edge.target
                yield outcome
            self.passes += 1
            yield StepOutcome(StepKind.PASS)

        self.current_edge = None
        if last_relaxed is None:
            self._result = Distances(self.table)
            return

        cycle = self._extract_cycle(last_relaxed)
        edges = tuple(
            Edge(a, b, self.graph.weight(a, b)) for a, b in zip(cycle, cycle[1:] + cycle[:1])
        )
        logger.info(
            "Negative cycle reachable from %d: %s (weight %d)",
            self.source,
            " -> ".join(map(str, cycle + cycle[:1])),
            sum(e.weight for e in edges),
        )
        self._result = NegativeCycleDetected(cycle=tuple(cycle), edges=edges)

    def _extract_cycle(self, node: int) -> List[int]:
        predecessor = self.table.predecessors()

        # n steps back from a node relaxed in the detection pass land on the cycle
        for _ in range(self.graph.node_count()):
            node = predecessor[node]

        cycle = [node]
        current = predecessor[node]
        while current != node:
            cycle.append(current)
            current = predecessor[current]
        cycle.reverse()

        start = cycle.index(min(cycle))
        return cycle[start:] + cycle[:start]


def bellman_ford(graph: GraphModel, source: int) -> ShortestPathResult:
    """
    Bellman-Ford algorithm for single-source shortest paths.

    Computes shortest paths from source to all reachable nodes, allowing
    negative edge weights. Detects negative cycles reachable from source.

    Args:
        graph: GraphModel (may have negative weights).
        source: Source node.

    Returns:
        Distances if no negative cycle is reachable from source, otherwise
        NegativeCycleDetected carrying one such cycle. A negative cycle that
        source cannot reach does not affect the result.

    Raises:
        InvalidNode: If source is not in graph.

    Complexity: O(VE) where V is vertices and E is edges.

    Example:
        >>> G = GraphModel(3, [(0, 1, 1), (1, 2, -2)])
        >>> bellman_ford(G, 0).distance(2)
        -1
        >>> G = GraphModel(2, [(0, 1, 1), (1, 0, -2)])
        >>> bellman_ford(G, 0).status
        <Status.NEGATIVE_CYCLE: 'negative_cycle'>
    """
    return BellmanFordStepper(graph, source).run()
