"""
Result containers shared across graph algorithms.

Every algorithm returns a frozen dataclass whose ``status`` tells which
outcome occurred. Non-fatal outcomes (negative cycle, cyclic ordering input,
disconnected spanning input) are result variants rather than exceptions, so
callers can always inspect the partial work that was done.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple, Union

from .core import Edge, _as_node
from .utils import reconstruct_path


class Status(Enum):
    """Outcome of a graph algorithm."""

    OK = "ok"
    NEGATIVE_CYCLE = "negative_cycle"
    PARTIAL_SPANNING_FOREST = "partial_spanning_forest"
    CYCLE_DETECTED = "cycle_detected"


class Unreachable(Enum):
    """Sentinel type for the distance of a node no path reaches."""

    UNREACHABLE = "unreachable"

    def __repr__(self) -> str:
        return "UNREACHABLE"


UNREACHABLE = Unreachable.UNREACHABLE

Distance = Union[int, Unreachable]


class DistanceTable:
    """
    Best-known distance and predecessor of every reached node.

    Only reached nodes are stored; lookups of any other node report
    ``UNREACHABLE`` and no predecessor. The table is filled in by a single
    algorithm run and should be treated as read-only by everyone else.

    Attributes:
        source: Node the distances are measured from.
    """

    def __init__(self, node_count: int, source: int):
        self.source = source
        self._node_count = node_count
        self._distance: Dict[int, int] = {}
        self._predecessor: Dict[int, int] = {}

    def _update(self, node: int, distance: int, predecessor: Optional[int] = None) -> None:
        self._distance[node] = distance
        if predecessor is None:
            self._predecessor.pop(node, None)
        else:
            self._predecessor[node] = predecessor

    def _get(self, node: int) -> Optional[int]:
        return self._distance.get(node)

    def distance(self, node: int) -> Distance:
        """Return the distance of node, or UNREACHABLE."""
        node = _as_node(node, self._node_count)
        if node not in self._distance:
            return UNREACHABLE
        return self._distance[node]

    def predecessor(self, node: int) -> Optional[int]:
        """Return the node before ``node`` on its best path, or None."""
        return self._predecessor.get(_as_node(node, self._node_count))

    def is_reachable(self, node: int) -> bool:
        return _as_node(node, self._node_count) in self._distance

    def reached(self) -> List[int]:
        """Return reached nodes in index order."""
        return sorted(self._distance)

    def distances(self) -> List[Distance]:
        """Return the distance of every node, indexed by node."""
        return [self._distance.get(node, UNREACHABLE) for node in range(self._node_count)]

    def predecessors(self) -> Dict[int, int]:
        """Return a copy of the predecessor mapping of reached nodes."""
        return dict(self._predecessor)

    def path_to(self, target: int) -> Tuple[int, ...]:
        """
        Return the node sequence from source to target.

        Returns an empty tuple if target is unreachable.
        """
        target = _as_node(target, self._node_count)
        if target not in self._distance:
            return ()
        path = reconstruct_path(self._predecessor, self.source, target)
        return tuple(path) if path is not None else ()

    def __contains__(self, node: object) -> bool:
        return node in self._distance

    def __len__(self) -> int:
        return len(self._distance)

    def __repr__(self) -> str:
        return f"DistanceTable(source={self.source}, reached={len(self._distance)}/{self._node_count})"


@dataclass(frozen=True)
class Distances:
    """Single-source distances with no negative cycle in the way."""

    table: DistanceTable
    status: Status = field(default=Status.OK, init=False)

    def distance(self, node: int) -> Distance:
        return self.table.distance(node)

    def path_to(self, node: int) -> Tuple[int, ...]:
        return self.table.path_to(node)


@dataclass(frozen=True)
class NegativeCycleDetected:
    """
    A cycle of negative total weight is reachable from the source.

    Attributes:
        cycle: Nodes of one such cycle in traversal order; the last node
            links back to the first.
        edges: Arcs of that cycle in the same order.
    """

    cycle: Tuple[int, ...]
    edges: Tuple[Edge, ...]
    status: Status = field(default=Status.NEGATIVE_CYCLE, init=False)

    @property
    def total_weight(self) -> int:
        return sum(edge.weight for edge in self.edges)


ShortestPathResult = Union[Distances, NegativeCycleDetected]


@dataclass(frozen=True)
class PathResult:
    """
    Outcome of a single-pair search.

    Attributes:
        source: Start node.
        goal: Target node.
        path: Nodes from source to goal inclusive, empty if unreachable.
        cost: Total weight of path, or UNREACHABLE.
        table: Distance table at termination.
        expanded: Number of nodes popped as authoritative entries.
    """

    source: int
    goal: int
    path: Tuple[int, ...]
    cost: Distance
    table: DistanceTable
    expanded: int
    status: Status = field(default=Status.OK, init=False)

    @property
    def found(self) -> bool:
        return bool(self.path)


@dataclass(frozen=True)
class SpanningTree:
    """Minimum spanning tree of a connected graph, edges in acceptance order."""

    edges: Tuple[Edge, ...]
    status: Status = field(default=Status.OK, init=False)

    @property
    def total_weight(self) -> int:
        return sum(edge.weight for edge in self.edges)


@dataclass(frozen=True)
class PartialSpanningForest:
    """
    Spanning result of a disconnected graph.

    Attributes:
        edges: Accepted edges in acceptance order.
        spanned_nodes: Nodes covered by the forest. Prim covers only the
            component of its start node, Kruskal covers every node.
    """

    edges: Tuple[Edge, ...]
    spanned_nodes: FrozenSet[int]
    status: Status = field(default=Status.PARTIAL_SPANNING_FOREST, init=False)

    @property
    def total_weight(self) -> int:
        return sum(edge.weight for edge in self.edges)

    @property
    def component_count(self) -> int:
        return len(self.spanned_nodes) - len(self.edges)


SpanningResult = Union[SpanningTree, PartialSpanningForest]


@dataclass(frozen=True)
class TopologicalOrder:
    """Every node, ordered so that each arc points forward."""

    order: Tuple[int, ...]
    status: Status = field(default=Status.OK, init=False)


@dataclass(frozen=True)
class CycleDetected:
    """
    Kahn's algorithm stalled because the graph has a directed cycle.

    Attributes:
        processed: Nodes emitted before the queue ran dry.
        remaining: Nodes never emitted; each lies on or behind a cycle.
    """

    processed: Tuple[int, ...]
    remaining: Tuple[int, ...]
    status: Status = field(default=Status.CYCLE_DETECTED, init=False)

    @property
    def order(self) -> Tuple[int, ...]:
        return ()


OrderingResult = Union[TopologicalOrder, CycleDetected]


@dataclass(frozen=True)
class Traversal:
    """
    Breadth-first visit order with hop counts.

    Attributes:
        order: Nodes in dequeue order.
        table: Hop-count distances and BFS-tree predecessors.
    """

    order: Tuple[int, ...]
    table: DistanceTable
    status: Status = field(default=Status.OK, init=False)

    def path_to(self, node: int) -> Tuple[int, ...]:
        return self.table.path_to(node)
