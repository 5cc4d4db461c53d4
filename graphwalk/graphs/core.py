"""
Core graph data structures.

Provides an immutable weighted GraphModel over dense integer nodes, a mutable
GraphBuilder to assemble one, and GridGraph, a GraphModel derived from a
boolean wall grid. Neighbors are returned in insertion order so that every
algorithm is deterministic.
"""

import numbers
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import ArrayLike

from ..diagnostics import assert_adjacency_consistent, is_debug_enabled
from .errors import InvalidNode

EdgeLike = Union["Edge", Tuple[int, int], Tuple[int, int, int]]


@dataclass(frozen=True)
class Edge:
    """
    Weighted arc from ``source`` to ``target``.

    Unpacks like a ``(source, target, weight)`` tuple.
    """

    source: int
    target: int
    weight: int = 1

    def __iter__(self) -> Iterator[int]:
        return iter((self.source, self.target, self.weight))

    def reversed(self) -> "Edge":
        """Return the same edge pointing the other way."""
        return Edge(self.target, self.source, self.weight)


def _as_node(node: object, node_count: int) -> int:
    if (
        isinstance(node, bool)
        or not isinstance(node, numbers.Integral)
        or not 0 <= node < node_count
    ):
        raise InvalidNode(node, node_count)
    return int(node)


def _as_weight(weight: object) -> int:
    if isinstance(weight, bool) or not isinstance(weight, numbers.Integral):
        raise TypeError(f"Edge weight must be an integer, got {weight!r}")
    return int(weight)


class GraphModel:
    """
    Immutable weighted graph with adjacency-list representation.

    Nodes are the integers ``0 .. node_count - 1``. Undirected graphs store
    each edge as two arcs of equal weight. Adding the same ordered pair twice
    keeps the position of the first edge and the weight of the last one, so
    every algorithm sees at most one arc per ordered pair.

    Attributes:
        directed: If True, graph is directed; otherwise undirected.

    Complexity:
        - construction: O(V + E)
        - neighbors: O(1) (returns a stored tuple)
        - weight lookup: O(1)
    """

    def __init__(
        self,
        node_count: int,
        edges: Iterable[EdgeLike] = (),
        directed: bool = True,
    ):
        """
        Build a graph from a node count and an edge list.

        Args:
            node_count: Number of nodes (non-negative integer).
            edges: Iterable of Edge or ``(u, v[, weight])`` tuples.
            directed: If True, graph is directed; otherwise undirected.

        Raises:
            ValueError: If node_count is negative or not an integer.
            InvalidNode: If an edge endpoint is out of range.
            TypeError: If an edge weight is not an integer.
        """
        if (
            isinstance(node_count, bool)
            or not isinstance(node_count, numbers.Integral)
            or node_count < 0
        ):
            raise ValueError(f"node_count must be a non-negative integer, got {node_count!r}")

        self.directed = bool(directed)
        self._node_count = int(node_count)

        adjacency: List[List[Edge]] = [[] for _ in range(self._node_count)]
        slots: Dict[Tuple[int, int], int] = {}
        logical: List[Edge] = []
        logical_slots: Dict[Tuple[int, int], int] = {}

        for item in edges:
            raw = item if isinstance(item, Edge) else Edge(*item)
            u = _as_node(raw.source, self._node_count)
            v = _as_node(raw.target, self._node_count)
            edge = Edge(u, v, _as_weight(raw.weight))

            key = (u, v) if self.directed or u <= v else (v, u)
            if key in logical_slots:
                logical[logical_slots[key]] = edge
            else:
                logical_slots[key] = len(logical)
                logical.append(edge)

            self._place(adjacency, slots, edge)
            if not self.directed and u != v:
                self._place(adjacency, slots, edge.reversed())

        self._adjacency: Tuple[Tuple[Edge, ...], ...] = tuple(
            tuple(self._order_arcs(node, arcs)) for node, arcs in enumerate(adjacency)
        )
        self._edges: Tuple[Edge, ...] = tuple(logical)
        self._arcs: Tuple[Edge, ...] = tuple(e for arcs in self._adjacency for e in arcs)
        self._weights: Dict[Tuple[int, int], int] = {
            (e.source, e.target): e.weight for e in self._arcs
        }

        if is_debug_enabled():
            assert_adjacency_consistent(self)

    @staticmethod
    def _place(
        adjacency: List[List[Edge]], slots: Dict[Tuple[int, int], int], edge: Edge
    ) -> None:
        key = (edge.source, edge.target)
        if key in slots:
            adjacency[edge.source][slots[key]] = edge
        else:
            slots[key] = len(adjacency[edge.source])
            adjacency[edge.source].append(edge)

    def _order_arcs(self, node: int, arcs: List[Edge]) -> Sequence[Edge]:
        return arcs

    def _check_node(self, node: object) -> int:
        return _as_node(node, self._node_count)

    def node_count(self) -> int:
        """Return the number of nodes."""
        return self._node_count

    def nodes(self) -> range:
        """Return all nodes in index order."""
        return range(self._node_count)

    def has_node(self, node: object) -> bool:
        """Return True if node is a valid index for this graph."""
        try:
            self._check_node(node)
        except InvalidNode:
            return False
        return True

    def neighbors(self, node: int) -> Tuple[Edge, ...]:
        """
        Return outgoing arcs of a node in insertion order.

        Args:
            node: Node to get neighbors for.

        Returns:
            Tuple of Edge objects whose source is ``node``.

        Raises:
            InvalidNode: If node is not in graph.
        """
        return self._adjacency[self._check_node(node)]

    def edges(self) -> Tuple[Edge, ...]:
        """
        Return the logical edges in insertion order.

        For undirected graphs each edge appears once, in the orientation it
        was last added with.
        """
        return self._edges

    def arcs(self) -> Tuple[Edge, ...]:
        """Return every directed arc, grouped by source node in index order."""
        return self._arcs

    def edge_count(self) -> int:
        """Return the number of logical edges."""
        return len(self._edges)

    def weight(self, u: int, v: int) -> Optional[int]:
        """
        Return the weight of arc (u, v), or None if there is no such arc.

        Raises:
            InvalidNode: If u or v is not in graph.
        """
        return self._weights.get((self._check_node(u), self._check_node(v)))

    def has_negative_weights(self) -> bool:
        """Return True if any edge has a negative weight."""
        return any(edge.weight < 0 for edge in self._edges)

    def __len__(self) -> int:
        return self._node_count

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return f"{type(self).__name__}({kind}, nodes={self._node_count}, edges={len(self._edges)})"


class GraphBuilder:
    """
    Mutable accumulator of nodes and edges that produces a GraphModel.

    Example:
        >>> b = GraphBuilder(directed=True)
        >>> a, c = b.add_node(), b.add_node()
        >>> b.add_edge(a, c, 4)
        Edge(source=0, target=1, weight=4)
        >>> b.build().neighbors(a)
        (Edge(source=0, target=1, weight=4),)
    """

    def __init__(self, directed: bool = True, node_count: int = 0):
        self.directed = directed
        self._node_count = 0
        self._edges: List[Edge] = []
        if node_count:
            self.add_nodes(node_count)

    def node_count(self) -> int:
        return self._node_count

    def add_node(self) -> int:
        """Add a node and return its index."""
        self._node_count += 1
        return self._node_count - 1

    def add_nodes(self, count: int) -> range:
        """Add ``count`` nodes and return their indices."""
        if count < 0:
            raise ValueError(f"Cannot add a negative number of nodes: {count}")
        first = self._node_count
        self._node_count += count
        return range(first, self._node_count)

    def add_edge(self, u: int, v: int, weight: int = 1) -> Edge:
        """
        Add a weighted edge from u to v.

        For undirected builders the edge is usable in both directions once
        built. Adding an existing pair again overrides its weight.

        Raises:
            InvalidNode: If u or v has not been added.
            TypeError: If weight is not an integer.
        """
        edge = Edge(
            _as_node(u, self._node_count),
            _as_node(v, self._node_count),
            _as_weight(weight),
        )
        self._edges.append(edge)
        return edge

    def build(self) -> GraphModel:
        """Return an immutable GraphModel with the current nodes and edges."""
        return GraphModel(self._node_count, self._edges, directed=self.directed)


# Neighbor offsets in visiting order: right, left, down, up.
_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))


class GridGraph(GraphModel):
    """
    GraphModel over the open cells of a rectangular grid.

    Cell ``(row, col)`` is node ``row * cols + col``. Each open cell links to
    its open 4-directional neighbors, visited right, left, down, up. Blocked
    cells stay in the node range but have no edges.

    Without ``weights`` every move costs 1 and the graph is undirected. With a
    terrain array the cost of a move is the weight of the cell entered, so
    the graph is directed.

    Example:
        >>> grid = GridGraph([[False, False], [True, False]])
        >>> grid.index(1, 1)
        3
        >>> [e.target for e in grid.neighbors(grid.index(0, 1))]
        [0, 3]
    """

    def __init__(self, walls: ArrayLike, weights: Optional[ArrayLike] = None):
        """
        Args:
            walls: 2D boolean array-like, True for blocked cells.
            weights: Optional 2D integer array-like of terrain costs, same
                shape as walls.

        Raises:
            ValueError: If walls is not 2D or weights has a different shape.
            TypeError: If weights is not an integer array.
        """
        wall_array = np.array(walls, dtype=bool)
        if wall_array.ndim != 2:
            raise ValueError(f"Grid walls must be 2D, got shape {wall_array.shape}")
        wall_array.setflags(write=False)

        terrain = None
        if weights is not None:
            terrain = np.array(weights)
            if terrain.shape != wall_array.shape:
                raise ValueError(
                    f"Terrain shape {terrain.shape} does not match grid shape {wall_array.shape}"
                )
            if terrain.size and not np.issubdtype(terrain.dtype, np.integer):
                raise TypeError(f"Terrain weights must be integers, got dtype {terrain.dtype}")
            terrain.setflags(write=False)

        self.rows, self.cols = (int(s) for s in wall_array.shape)
        self._walls = wall_array
        self._terrain = terrain

        super().__init__(
            self.rows * self.cols, self._grid_edges(), directed=terrain is not None
        )

    @classmethod
    def from_strings(
        cls, lines: Sequence[str], wall: str = "#", weights: Optional[ArrayLike] = None
    ) -> "GridGraph":
        """
        Build a grid from text rows where ``wall`` marks a blocked cell.

        Raises:
            ValueError: If the rows have different lengths.
        """
        widths = {len(line) for line in lines}
        if len(widths) > 1:
            raise ValueError(f"Grid rows have different lengths: {sorted(widths)}")
        cols = widths.pop() if widths else 0
        walls = np.array([[ch == wall for ch in line] for line in lines], dtype=bool)
        return cls(walls.reshape(len(lines), cols), weights)

    def _grid_edges(self) -> Iterator[Edge]:
        for r in range(self.rows):
            for c in range(self.cols):
                if self._walls[r, c]:
                    continue
                u = r * self.cols + c
                for dr, dc in _DIRECTIONS:
                    nr, nc = r + dr, c + dc
                    if not (0 <= nr < self.rows and 0 <= nc < self.cols):
                        continue
                    if self._walls[nr, nc]:
                        continue
                    v = nr * self.cols + nc
                    if self._terrain is None:
                        if u < v:
                            yield Edge(u, v, 1)
                    else:
                        yield Edge(u, v, int(self._terrain[nr, nc]))

    def _order_arcs(self, node: int, arcs: List[Edge]) -> Sequence[Edge]:
        r, c = divmod(node, self.cols)
        return sorted(
            arcs, key=lambda e: _DIRECTIONS.index((e.target // self.cols - r, e.target % self.cols - c))
        )

    @property
    def walls(self) -> np.ndarray:
        """Read-only boolean wall array."""
        return self._walls

    @property
    def terrain(self) -> Optional[np.ndarray]:
        """Read-only terrain weights, or None for a uniform grid."""
        return self._terrain

    def index(self, row: int, col: int) -> int:
        """
        Return the node index of cell (row, col).

        Raises:
            InvalidNode: If the cell is outside the grid or a coordinate is
                not an integer.
        """
        for coord, limit in ((row, self.rows), (col, self.cols)):
            if (
                isinstance(coord, bool)
                or not isinstance(coord, numbers.Integral)
                or not 0 <= coord < limit
            ):
                raise InvalidNode((row, col), self._node_count)
        return int(row) * self.cols + int(col)

    def position(self, node: int) -> Tuple[int, int]:
        """Return the (row, col) cell of a node."""
        return divmod(self._check_node(node), self.cols)

    def is_blocked(self, row: int, col: int) -> bool:
        """
        Return True if cell (row, col) is a wall.

        Raises:
            InvalidNode: If the cell is outside the grid.
        """
        self.index(row, col)
        return bool(self._walls[row, col])

    def manhattan(self, a: int, b: int) -> int:
        """Return the Manhattan distance between the cells of two nodes."""
        ra, ca = self.position(a)
        rb, cb = self.position(b)
        return abs(ra - rb) + abs(ca - cb)

    def __repr__(self) -> str:
        kind = "uniform" if self._terrain is None else "terrain"
        return f"GridGraph({self.rows}x{self.cols}, {kind}, open={int((~self._walls).sum())})"
