"""
Graph traversal: breadth-first search.

Ignores edge weights and measures distance in hops. On a GridGraph this is
the classic flood fill from a start cell, optionally stopping at a goal.

References:
    - Cormen, Leiserson, Rivest, Stein. "Introduction to Algorithms", 3rd ed.
      Chapter 22.2 (BFS).
"""

from collections import deque
from typing import Deque, Iterator, List, Optional

from ..logging import get_logger
from .core import GraphModel, _as_node
from .results import DistanceTable, Traversal
from .stepper import StepKind, StepOutcome, Stepper

logger = get_logger(__name__)


class BfsStepper(Stepper[Traversal]):
    """
    Breadth-first search, one dequeue (POP) or arc check (RELAX when it
    discovers a node, SKIP otherwise) per step.

    Attributes:
        graph: Graph to traverse.
        source: Start node.
        goal: Optional node at which to stop once dequeued.
        table: Hop counts and BFS-tree predecessors of discovered nodes.
        queue: Live FIFO of discovered, unexpanded nodes.
        order: Nodes dequeued so far.
        current: Node being expanded, if any.
    """

    def __init__(self, graph: GraphModel, source: int, goal: Optional[int] = None):
        super().__init__()
        self.graph = graph
        self.source = _as_node(source, graph.node_count())
        self.goal = None if goal is None else _as_node(goal, graph.node_count())
        self.table = DistanceTable(graph.node_count(), self.source)
        self.queue: Deque[int] = deque()
        self.order: List[int] = []
        self.current: Optional[int] = None

    def _run(self) -> Iterator[StepOutcome]:
        self.table._update(self.source, 0)
        self.queue.append(self.source)

        while self.queue:
            u = self.queue.popleft()
            self.current = u
            self.order.append(u)
            yield StepOutcome(StepKind.POP, node=u)

            if u == self.goal:
                break

            hops = self.table._get(u) + 1
            for edge in self.graph.neighbors(u):
                if edge.target in self.table:
                    yield StepOutcome(StepKind.SKIP, node=edge.target, edge=edge)
                    continue
                self.table._update(edge.target, hops, u)
                self.queue.append(edge.target)
                yield StepOutcome(StepKind.RELAX, node=edge.target, edge=edge)

        self.current = None
        logger.debug("bfs: visited %d nodes from %d", len(self.order), self.source)
        self._result = Traversal(tuple(self.order), self.table)


def bfs(graph: GraphModel, source: int, goal: Optional[int] = None) -> Traversal:
    """
    Breadth-first search from a source node.

    Args:
        graph: GraphModel to traverse.
        source: Source node to start BFS from.
        goal: If given, stop as soon as goal is dequeued.

    Returns:
        Traversal with nodes in dequeue order and a DistanceTable of hop
        counts whose predecessors form the BFS tree.

    Raises:
        InvalidNode: If source or goal is not in graph.

    Complexity: O(V + E) where V is vertices and E is edges.

    Example:
        >>> grid = GridGraph.from_strings(["..", "#."])
        >>> bfs(grid, 0).order
        (0, 1, 3)
    """
    return BfsStepper(graph, source, goal).run()
