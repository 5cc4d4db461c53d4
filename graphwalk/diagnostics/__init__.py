"""Diagnostics and debugging utilities for graphwalk."""

from .core import (
    assert_adjacency_consistent,
    assert_disjoint_set_acyclic,
    assert_spanning_edges,
    assert_topological_order,
    is_adjacency_consistent,
)
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    reload_debug_from_env,
    set_debug_enabled,
)

__all__ = [
    "is_adjacency_consistent",
    "assert_adjacency_consistent",
    "assert_disjoint_set_acyclic",
    "assert_topological_order",
    "assert_spanning_edges",
    "is_debug_enabled",
    "set_debug_enabled",
    "reload_debug_from_env",
    "debug_context",
]
