"""Pytest configuration and shared fixtures for graphwalk tests.

This module provides:
- A deterministic numpy RNG fixture
- Factories for random graphs and grids built from that RNG
- Restoration of the global debug-mode flag after every test
"""

import os
from typing import Callable

import numpy as np
import pytest

from graphwalk.diagnostics import is_debug_enabled, set_debug_enabled
from graphwalk.graphs import GraphModel, GridGraph


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.

    Returns:
        A seeded numpy.random.Generator instance.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def restore_debug_mode():
    """Auto-use fixture so a test toggling debug mode cannot leak it."""
    original = is_debug_enabled()
    yield
    set_debug_enabled(original)


@pytest.fixture(scope="function")
def random_graph(rng: np.random.Generator) -> Callable[..., GraphModel]:
    """Factory for random weighted graphs.

    Arguments of the returned callable:
        node_count: Number of nodes.
        density: Probability of each ordered pair getting an edge.
        low, high: Weight range, ``low`` inclusive, ``high`` exclusive.
        directed: Directedness of the graph.
        connected: If True, first thread a random path through every node.
    """

    def build(
        node_count: int,
        density: float = 0.3,
        low: int = 0,
        high: int = 10,
        directed: bool = True,
        connected: bool = False,
    ) -> GraphModel:
        edges = []
        if connected and node_count > 1:
            order = rng.permutation(node_count)
            for a, b in zip(order[:-1], order[1:]):
                edges.append((int(a), int(b), int(rng.integers(low, high))))
        for u in range(node_count):
            for v in range(node_count):
                if u != v and rng.random() < density:
                    edges.append((u, v, int(rng.integers(low, high))))
        return GraphModel(node_count, edges, directed=directed)

    return build


@pytest.fixture(scope="function")
def random_grid(rng: np.random.Generator) -> Callable[..., GridGraph]:
    """Factory for random wall grids with the two corner cells kept open."""

    def build(rows: int, cols: int, wall_ratio: float = 0.25, terrain: bool = False) -> GridGraph:
        walls = rng.random((rows, cols)) < wall_ratio
        walls[0, 0] = False
        walls[rows - 1, cols - 1] = False
        weights = rng.integers(1, 6, size=(rows, cols)) if terrain else None
        return GridGraph(walls, weights)

    return build
