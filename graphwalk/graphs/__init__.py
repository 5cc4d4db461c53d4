"""
Graph algorithms package for graphwalk.

This package provides canonical textbook graph algorithms including:
- Graph data structures (GraphModel, GraphBuilder, GridGraph)
- Disjoint-set union (DisjointSet, connected_components)
- Shortest path algorithms (Dijkstra, A*, Bellman-Ford)
- All-pairs shortest paths (Floyd-Warshall)
- Minimum spanning trees (Kruskal, Prim)
- Topological ordering (Kahn) and directed-cycle detection
- Breadth-first traversal

Every algorithm also has a Stepper class that performs one unit of work per
``step()`` call, for callers that need to inspect intermediate state.
"""

from .allpairs import AllPairsDistances, FloydWarshallStepper, floyd_warshall
from .core import Edge, GraphBuilder, GraphModel, GridGraph
from .disjoint_set import DisjointSet, connected_components
from .errors import GraphError, InvalidNode, NegativeWeightError
from .frontier import FrontierEntry, PriorityFrontier
from .mst import KruskalStepper, PrimStepper, kruskal_mst, prim_mst
from .ordering import (
    CycleSearchStepper,
    KahnStepper,
    find_cycle,
    has_cycle,
    topological_sort,
)
from .results import (
    UNREACHABLE,
    CycleDetected,
    Distance,
    Distances,
    DistanceTable,
    NegativeCycleDetected,
    PartialSpanningForest,
    PathResult,
    SpanningTree,
    Status,
    TopologicalOrder,
    Traversal,
    Unreachable,
)
from .shortest import (
    AStarStepper,
    BellmanFordStepper,
    DijkstraStepper,
    astar,
    bellman_ford,
    dijkstra,
)
from .stepper import StepKind, StepOutcome, Stepper
from .traversal import BfsStepper, bfs
from .utils import manhattan_heuristic, reconstruct_path, zero_heuristic

__all__ = [
    # Model
    "Edge",
    "GraphModel",
    "GraphBuilder",
    "GridGraph",
    "GraphError",
    "InvalidNode",
    "NegativeWeightError",
    # Data structures
    "DisjointSet",
    "PriorityFrontier",
    "FrontierEntry",
    # Results
    "Status",
    "UNREACHABLE",
    "Unreachable",
    "Distance",
    "DistanceTable",
    "Distances",
    "NegativeCycleDetected",
    "PathResult",
    "SpanningTree",
    "PartialSpanningForest",
    "TopologicalOrder",
    "CycleDetected",
    "Traversal",
    "AllPairsDistances",
    # Steppers
    "Stepper",
    "StepKind",
    "StepOutcome",
    "DijkstraStepper",
    "AStarStepper",
    "BellmanFordStepper",
    "PrimStepper",
    "KruskalStepper",
    "KahnStepper",
    "CycleSearchStepper",
    "BfsStepper",
    "FloydWarshallStepper",
    # Algorithms
    "dijkstra",
    "astar",
    "bellman_ford",
    "floyd_warshall",
    "kruskal_mst",
    "prim_mst",
    "topological_sort",
    "find_cycle",
    "has_cycle",
    "bfs",
    "connected_components",
    # Utilities
    "reconstruct_path",
    "manhattan_heuristic",
    "zero_heuristic",
]

# Example usage:
# from graphwalk.graphs import GridGraph, astar, manhattan_heuristic
#
# grid = GridGraph.from_strings(["...#", ".#.#", "...."])
# result = astar(grid, grid.index(0, 0), grid.index(2, 3), manhattan_heuristic(grid))
# result.path   # (0, 1, 2, 6, 10, 11)
# result.cost   # 5
