"""
Min-oriented priority frontier for Dijkstra, A* and Prim.

A binary heap (heapq) of ``(priority, tie_key, sequence, item)`` entries.
There is no decrease-key: when a better priority is found for an item the
caller pushes a fresh entry and discards the stale one when it is popped
(lazy deletion).
"""

import heapq
import itertools
from typing import Any, Generic, Hashable, List, NamedTuple, Optional, Tuple, TypeVar

T = TypeVar("T")


class FrontierEntry(NamedTuple):
    """A popped or peeked frontier entry."""

    priority: float
    item: Any


class PriorityFrontier(Generic[T]):
    """
    Binary min-heap keyed by ``(priority, tie_key)``.

    Entries with equal priority pop in ``tie_key`` order; ``tie_key``
    defaults to insertion order. A sequence number breaks any remaining tie so
    items themselves are never compared.

    Complexity:
        - push / pop: O(log n)
        - peek / len: O(1)

    Example:
        >>> f = PriorityFrontier()
        >>> f.push(3, "c"); f.push(1, "a"); f.push(1, "b")
        >>> f.pop()
        FrontierEntry(priority=1, item='a')
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[float, Hashable, int, T]] = []
        self._counter = itertools.count()

    def push(self, priority: float, item: T, tie_key: Optional[Hashable] = None) -> None:
        """
        Add an entry.

        Args:
            priority: Heap key; smaller pops first.
            item: Payload returned by pop.
            tie_key: Secondary key among equal priorities. Must be comparable
                with the tie keys of other entries.
        """
        seq = next(self._counter)
        heapq.heappush(self._heap, (priority, seq if tie_key is None else tie_key, seq, item))

    def pop(self) -> FrontierEntry:
        """
        Remove and return the minimum entry.

        Raises:
            IndexError: If the frontier is empty.
        """
        if not self._heap:
            raise IndexError("pop from empty frontier")
        priority, _, _, item = heapq.heappop(self._heap)
        return FrontierEntry(priority, item)

    def peek(self) -> FrontierEntry:
        """
        Return the minimum entry without removing it.

        Raises:
            IndexError: If the frontier is empty.
        """
        if not self._heap:
            raise IndexError("peek at empty frontier")
        priority, _, _, item = self._heap[0]
        return FrontierEntry(priority, item)

    def is_empty(self) -> bool:
        return not self._heap

    def contents(self) -> List[FrontierEntry]:
        """Return every entry, stale ones included, in pop order."""
        return [FrontierEntry(p, item) for p, _, _, item in sorted(self._heap, key=lambda e: e[:3])]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
