"""
Utility functions for graph algorithms.

Provides path reconstruction from predecessor maps and A* heuristics.
"""

from typing import TYPE_CHECKING, Callable, List, Mapping, Optional

if TYPE_CHECKING:
    from .core import GridGraph

Heuristic = Callable[[int, int], float]


def reconstruct_path(
    predecessor: Mapping[int, int], source: int, target: int
) -> Optional[List[int]]:
    """
    Reconstruct path from source to target using a predecessor map.

    The map should come from a shortest-path algorithm where
    ``predecessor[node]`` is the previous node on the best known path. Nodes
    without an entry have no predecessor.

    Args:
        predecessor: Mapping node -> previous node.
        source: First node of the path.
        target: Last node of the path.

    Returns:
        List of nodes from source to target (inclusive), or None if walking
        back from target never reaches source.

    Example:
        >>> reconstruct_path({1: 0, 2: 1}, 0, 2)
        [0, 1, 2]
        >>> reconstruct_path({1: 0}, 0, 3) is None
        True
    """
    path = [target]
    seen = {target}
    current = target
    while current != source:
        if current not in predecessor:
            return None
        current = predecessor[current]
        if current in seen:
            # Predecessor chains only loop around negative cycles
            return None
        seen.add(current)
        path.append(current)

    path.reverse()
    return path


def zero_heuristic(node: int, goal: int) -> float:
    """Heuristic that estimates nothing; turns A* into Dijkstra."""
    return 0


def manhattan_heuristic(grid: "GridGraph", scale: int = 1) -> Heuristic:
    """
    Build the Manhattan-distance heuristic for a grid.

    Admissible whenever every move costs at least ``scale``, which holds for
    uniform grids with the default scale of 1.

    Args:
        grid: Grid whose node indices the heuristic receives.
        scale: Lower bound on the cost of one move.

    Returns:
        Callable ``h(node, goal)``.
    """

    def heuristic(node: int, goal: int) -> float:
        return scale * grid.manhattan(node, goal)

    return heuristic
