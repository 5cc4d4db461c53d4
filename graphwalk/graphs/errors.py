"""Exceptions raised by graph construction and queries."""


class GraphError(Exception):
    """Base class for graphwalk graph errors."""


class InvalidNode(GraphError, IndexError):
    """A node index is not an integer in ``[0, node_count)``."""

    def __init__(self, node: object, node_count: int):
        self.node = node
        self.node_count = node_count
        super().__init__(f"Node {node!r} not in graph with {node_count} nodes")


class NegativeWeightError(GraphError, ValueError):
    """An algorithm that requires non-negative weights met a negative edge."""
