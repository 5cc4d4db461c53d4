"""
Topological ordering (Kahn) and directed-cycle detection (DFS).

Both treat the graph's arcs as directed; in an undirected graph every edge
is a two-node cycle.

References:
    - Kahn, A. B. "Topological sorting of large networks", CACM 1962.
    - Cormen, Leiserson, Rivest, Stein. "Introduction to Algorithms", 3rd ed.
      Chapters 22.3 (DFS, edge classification) and 22.4 (Topological sort).
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterator, List, Optional, Tuple

import numpy as np

from ..diagnostics import assert_topological_order, is_debug_enabled
from ..logging import get_logger
from .core import Edge, GraphModel
from .results import CycleDetected, OrderingResult, TopologicalOrder
from .stepper import StepKind, StepOutcome, Stepper

logger = get_logger(__name__)

WHITE, GRAY, BLACK = 0, 1, 2


class KahnStepper(Stepper[OrderingResult]):
    """
    Kahn's algorithm, one step per dequeue (POP) or successor update
    (DECREMENT).

    Attributes:
        graph: Graph to order.
        indegree: Live count of unprocessed predecessors per node.
        queue: FIFO of nodes whose indegree reached zero.
        order: Topological prefix emitted so far.
        current: Node whose successors are being updated, if any.
    """

    def __init__(self, graph: GraphModel):
        super().__init__()
        self.graph = graph
        self.indegree = np.zeros(graph.node_count(), dtype=np.int64)
        for edge in graph.arcs():
            self.indegree[edge.target] += 1

        self.queue: Deque[int] = deque(
            node for node in graph.nodes() if self.indegree[node] == 0
        )
        self.order: List[int] = []
        self.current: Optional[int] = None

    def _run(self) -> Iterator[StepOutcome]:
        while self.queue:
            u = self.queue.popleft()
            self.current = u
            self.order.append(u)
            yield StepOutcome(StepKind.POP, node=u)

            for edge in self.graph.neighbors(u):
                self.indegree[edge.target] -= 1
                if self.indegree[edge.target] == 0:
                    self.queue.append(edge.target)
                yield StepOutcome(StepKind.DECREMENT, node=edge.target, edge=edge)

        self.current = None
        if len(self.order) == self.graph.node_count():
            if is_debug_enabled():
                assert_topological_order(self.graph, self.order)
            self._result = TopologicalOrder(tuple(self.order))
            return

        emitted = set(self.order)
        remaining = tuple(node for node in self.graph.nodes() if node not in emitted)
        logger.info(
            "topological_sort: cycle detected, %d of %d nodes left unordered",
            len(remaining),
            self.graph.node_count(),
        )
        self._result = CycleDetected(processed=tuple(self.order), remaining=remaining)


def topological_sort(graph: GraphModel) -> OrderingResult:
    """
    Kahn's algorithm for topological ordering.

    Seeds a FIFO queue with every zero-indegree node in index order, then
    repeatedly emits the head of the queue and releases its successors.

    Args:
        graph: GraphModel whose arcs define the precedence.

    Returns:
        TopologicalOrder listing every node, or CycleDetected (with an empty
        ``order``) if some nodes could never be released. An empty graph
        yields an empty TopologicalOrder.

    Complexity: O(V + E).

    Example:
        >>> topological_sort(GraphModel(3, [(2, 0), (0, 1)])).order
        (2, 0, 1)
    """
    return KahnStepper(graph).run()


@dataclass
class _Frame:
    node: int
    cursor: int = 0


class CycleSearchStepper(Stepper[Tuple[Edge, ...]]):
    """
    Iterative DFS cycle search, one frame move per step.

    Uses an explicit stack of ``(node, next neighbor index)`` frames instead
    of recursion. A node is gray while its frame is on the stack and black
    once all its arcs are explored. Steps are ENTER (push a white node),
    SKIP (arc to a black node), EXIT (pop a finished frame) and BACK_EDGE
    (arc to a gray node, which closes a cycle and ends the search).

    Attributes:
        graph: Graph to search.
        color: Live WHITE/GRAY/BLACK state per node.
        cycle: Arcs of the detected cycle, empty until one is found.
    """

    def __init__(self, graph: GraphModel):
        super().__init__()
        self.graph = graph
        self.color = np.full(graph.node_count(), WHITE, dtype=np.int8)
        self.cycle: Tuple[Edge, ...] = ()
        self._stack: List[_Frame] = []
        self._position: Dict[int, int] = {}

    def stack(self) -> List[Tuple[int, int]]:
        """Return the DFS stack as ``(node, next neighbor index)`` pairs."""
        return [(frame.node, frame.cursor) for frame in self._stack]

    def path(self) -> List[int]:
        """Return the nodes of the current DFS path, root first."""
        return [frame.node for frame in self._stack]

    def _enter(self, node: int) -> None:
        self.color[node] = GRAY
        self._position[node] = len(self._stack)
        self._stack.append(_Frame(node))

    def _close_cycle(self, back_edge: Edge) -> Tuple[Edge, ...]:
        start = self._position[back_edge.target]
        # every frame's last taken arc leads to the next frame; the top one is the back edge
        return tuple(
            self.graph.neighbors(frame.node)[frame.cursor - 1] for frame in self._stack[start:]
        )

    def _run(self) -> Iterator[StepOutcome]:
        for root in self.graph.nodes():
            if self.color[root] != WHITE:
                continue
            self._enter(root)
            yield StepOutcome(StepKind.ENTER, node=root)

            while self._stack:
                frame = self._stack[-1]
                arcs = self.graph.neighbors(frame.node)

                if frame.cursor == len(arcs):
                    self._stack.pop()
                    del self._position[frame.node]
                    self.color[frame.node] = BLACK
                    yield StepOutcome(StepKind.EXIT, node=frame.node)
                    continue

                edge = arcs[frame.cursor]
                frame.cursor += 1
                state = self.color[edge.target]

                if state == GRAY:
                    self.cycle = self._close_cycle(edge)
                    logger.info(
                        "find_cycle: back edge (%d, %d) closes a %d-edge cycle",
                        edge.source,
                        edge.target,
                        len(self.cycle),
                    )
                    yield StepOutcome(StepKind.BACK_EDGE, node=edge.target, edge=edge)
                    self._result = self.cycle
                    return

                if state == WHITE:
                    self._enter(edge.target)
                    yield StepOutcome(StepKind.ENTER, node=edge.target, edge=edge)
                else:
                    yield StepOutcome(StepKind.SKIP, node=edge.target, edge=edge)

        self._result = ()


def find_cycle(graph: GraphModel) -> Tuple[Edge, ...]:
    """
    Find a directed cycle with an iterative depth-first search.

    Roots are tried in index order and arcs in adjacency order; the first
    back edge found closes the reported cycle.

    Args:
        graph: GraphModel to search.

    Returns:
        Arcs of the first detected cycle in traversal order (the last arc
        returns to the first arc's source), or an empty tuple if acyclic.

    Complexity: O(V + E) time, O(V) stack frames on the heap.

    Example:
        >>> [tuple(e)[:2] for e in find_cycle(GraphModel(3, [(0, 1), (1, 2), (2, 0)]))]
        [(0, 1), (1, 2), (2, 0)]
    """
    return CycleSearchStepper(graph).run()


def has_cycle(graph: GraphModel) -> bool:
    """Return True if graph contains a directed cycle."""
    return bool(find_cycle(graph))
