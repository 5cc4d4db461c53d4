"""graphwalk - classical shortest-path, spanning-tree and ordering algorithms over weighted graphs and grids."""

__version__ = "0.1.0"

# Diagnostics
from .diagnostics import (
    debug_context,
    is_debug_enabled,
    reload_debug_from_env,
    set_debug_enabled,
)

# Graph algorithms
from .graphs import (
    UNREACHABLE,
    AllPairsDistances,
    AStarStepper,
    BellmanFordStepper,
    BfsStepper,
    CycleDetected,
    CycleSearchStepper,
    DijkstraStepper,
    DisjointSet,
    Distances,
    DistanceTable,
    Edge,
    FloydWarshallStepper,
    GraphBuilder,
    GraphError,
    GraphModel,
    GridGraph,
    InvalidNode,
    KahnStepper,
    KruskalStepper,
    NegativeCycleDetected,
    NegativeWeightError,
    PartialSpanningForest,
    PathResult,
    PrimStepper,
    PriorityFrontier,
    SpanningTree,
    Status,
    StepKind,
    StepOutcome,
    Stepper,
    TopologicalOrder,
    Traversal,
    astar,
    bellman_ford,
    bfs,
    connected_components,
    dijkstra,
    find_cycle,
    floyd_warshall,
    has_cycle,
    kruskal_mst,
    manhattan_heuristic,
    prim_mst,
    reconstruct_path,
    topological_sort,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

__all__ = [
    "__version__",
    # Diagnostics
    "is_debug_enabled",
    "set_debug_enabled",
    "reload_debug_from_env",
    "debug_context",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
    # Graphs
    "Edge",
    "GraphModel",
    "GraphBuilder",
    "GridGraph",
    "GraphError",
    "InvalidNode",
    "NegativeWeightError",
    "DisjointSet",
    "PriorityFrontier",
    "Status",
    "UNREACHABLE",
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
    "reconstruct_path",
    "manhattan_heuristic",
]
