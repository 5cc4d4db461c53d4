"""
All-pairs shortest path algorithms: Floyd-Warshall.

Computes shortest paths between all pairs of nodes. Each phase admits one
more intermediate node and is a single vectorized numpy update of the
distance, reachability and next-hop matrices.

Distances are kept as exact integers: an int64 matrix when every possible
simple-path weight fits comfortably in 64 bits, an object matrix of Python
ints otherwise. Unreachable pairs are tracked by a separate boolean matrix.

References:
    - Cormen, Leiserson, Rivest, Stein. "Introduction to Algorithms", 3rd ed.
      Chapter 25.2 (Floyd-Warshall).
"""

from typing import Iterator, Tuple

import numpy as np

from ..logging import get_logger
from .core import GraphModel, _as_node
from .results import UNREACHABLE, Distance
from .stepper import StepKind, StepOutcome, Stepper

logger = get_logger(__name__)

_NO_HOP = -1

# Largest weight bound for which sums of two clamped entries stay inside int64
_INT64_BOUND = 2**61


class AllPairsDistances:
    """
    Shortest distances and next hops between every pair of nodes.

    Unreachable pairs report UNREACHABLE. When ``has_negative_cycle`` is
    True the distances of pairs routed through such a cycle are not
    meaningful.
    """

    def __init__(self, dist: np.ndarray, reach: np.ndarray, next_hop: np.ndarray):
        self._dist = dist
        self._reach = reach
        self._next = next_hop
        for array in (self._dist, self._reach, self._next):
            array.setflags(write=False)

    @property
    def node_count(self) -> int:
        return self._dist.shape[0]

    @property
    def has_negative_cycle(self) -> bool:
        """True if some node has a negative-weight walk back to itself."""
        return bool(np.any(np.diag(self._dist) < 0))

    def matrix(self) -> np.ndarray:
        """
        Return the distance matrix as float64 with ``inf`` for unreachable pairs.

        Intended for display and numeric work; weights beyond 2**53 are
        rounded here. ``distance`` stays exact.
        """
        out = np.full(self._dist.shape, np.inf)
        out[self._reach] = self._dist[self._reach].astype(np.float64)
        return out

    def distance(self, u: int, v: int) -> Distance:
        u, v = _as_node(u, self.node_count), _as_node(v, self.node_count)
        if not self._reach[u, v]:
            return UNREACHABLE
        return int(self._dist[u, v])

    def path(self, u: int, v: int) -> Tuple[int, ...]:
        """
        Return the nodes of a shortest path from u to v.

        Returns an empty tuple if v is unreachable from u, or if the next-hop
        chain loops because of a negative cycle.
        """
        u, v = _as_node(u, self.node_count), _as_node(v, self.node_count)
        if self._next[u, v] == _NO_HOP:
            return ()

        path = [u]
        current = u
        while current != v:
            current = int(self._next[current, v])
            if current == _NO_HOP or len(path) > self.node_count:
                return ()
            path.append(current)
        return tuple(path)


class FloydWarshallStepper(Stepper[AllPairsDistances]):
    """
    Floyd-Warshall, one intermediate node per step (PASS with ``node=k``).

    Attributes:
        graph: Graph to analyze.
        dist: Live integer distance matrix; entries where ``reach`` is False
            are meaningless.
        reach: Live boolean matrix, True for pairs with a path so far.
        next_hop: Live next-hop matrix, -1 for pairs with no path yet.
        phase: Number of intermediate nodes admitted so far.
    """

    def __init__(self, graph: GraphModel):
        super().__init__()
        n = graph.node_count()
        self.graph = graph
        # No simple path weighs less than -bound; walks around a negative
        # cycle are clamped to floor so entries cannot grow without limit
        bound = sum(abs(edge.weight) for edge in graph.arcs())
        self._floor = -bound - 1
        dtype = np.int64 if bound < _INT64_BOUND else object
        self.dist = np.zeros((n, n), dtype=dtype)
        self.reach = np.zeros((n, n), dtype=bool)
        self.next_hop = np.full((n, n), _NO_HOP, dtype=np.int64)
        self.phase = 0

        idx = np.arange(n)
        self.reach[idx, idx] = True
        self.next_hop[idx, idx] = idx
        for edge in graph.arcs():
            u, v = edge.source, edge.target
            if not self.reach[u, v] or edge.weight < self.dist[u, v]:
                self.dist[u, v] = edge.weight
                self.reach[u, v] = True
                self.next_hop[u, v] = v

    def matrix(self) -> np.ndarray:
        """Return the live distances as float64 with ``inf`` for unreached pairs."""
        out = np.full(self.dist.shape, np.inf)
        out[self.reach] = self.dist[self.reach].astype(np.float64)
        return out

    def _run(self) -> Iterator[StepOutcome]:
        n = self.graph.node_count()
        for k in range(n):
            via = self.reach[:, k : k + 1] & self.reach[k : k + 1, :]
            through = self.dist[:, k : k + 1] + self.dist[k : k + 1, :]
            improve = via & (~self.reach | (through < self.dist))
            self.dist = np.where(improve, np.maximum(through, self._floor), self.dist)
            self.reach = self.reach | via
            self.next_hop = np.where(improve, self.next_hop[:, k : k + 1], self.next_hop)
            self.phase += 1
            yield StepOutcome(StepKind.PASS, node=k)

        result = AllPairsDistances(self.dist.copy(), self.reach.copy(), self.next_hop.copy())
        if result.has_negative_cycle:
            logger.info("floyd_warshall: graph contains a negative cycle")
        self._result = result


def floyd_warshall(graph: GraphModel) -> AllPairsDistances:
    """
    Floyd-Warshall algorithm for all-pairs shortest paths.

    Handles negative edge weights. Negative cycles are reported through
    ``has_negative_cycle`` rather than raised.

    Args:
        graph: GraphModel to analyze.

    Returns:
        AllPairsDistances with ``distance(u, v)`` and ``path(u, v)``.

    Complexity: O(n^3) where n is number of nodes.

    Example:
        >>> G = GraphModel(3, [(0, 1, 1), (1, 2, 2)])
        >>> apd = floyd_warshall(G)
        >>> apd.distance(0, 2)
        3
        >>> apd.path(0, 2)
        (0, 1, 2)
    """
    return FloydWarshallStepper(graph).run()
