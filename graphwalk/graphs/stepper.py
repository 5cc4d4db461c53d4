"""
Resumable, one-unit-at-a-time execution of graph algorithms.

Each algorithm is written once, as a generator that yields a StepOutcome
after every unit of work. A Stepper wraps that generator: ``step()`` advances
it by one unit, and the state it works on (frontier, distance table, visited
set, ...) stays readable between calls. The one-shot functions such as
``dijkstra`` simply run their stepper to completion.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Iterator, Optional, TypeVar

from .core import Edge

R = TypeVar("R")


class StepKind(Enum):
    """What a single step did."""

    POP = "pop"  # frontier/queue entry taken as authoritative
    STALE = "stale"  # outdated frontier entry discarded
    RELAX = "relax"  # edge improved the target's best distance
    SKIP = "skip"  # edge examined without effect
    ACCEPT = "accept"  # edge added to a spanning forest
    REJECT = "reject"  # edge would close a cycle
    DECREMENT = "decrement"  # indegree of a successor lowered
    ENTER = "enter"  # DFS frame pushed, node turns gray
    EXIT = "exit"  # DFS frame popped, node turns black
    BACK_EDGE = "back_edge"  # edge into a gray node, cycle found
    PASS = "pass"  # Bellman-Ford pass or Floyd-Warshall phase completed
    FINISHED = "finished"


@dataclass(frozen=True)
class StepOutcome:
    """
    Report of one step.

    Attributes:
        kind: What happened.
        node: Node the step concerned, if any.
        edge: Edge the step concerned, if any.
    """

    kind: StepKind
    node: Optional[int] = None
    edge: Optional[Edge] = None

    @property
    def finished(self) -> bool:
        return self.kind is StepKind.FINISHED


FINISHED = StepOutcome(StepKind.FINISHED)


class Stepper(ABC, Generic[R]):
    """
    Base class for algorithm steppers.

    Subclasses set up their state in ``__init__`` (validating input there so
    errors surface at construction) and implement ``_run`` as a generator that
    yields one StepOutcome per unit of work and stores the final result in
    ``self._result`` before returning.
    """

    def __init__(self) -> None:
        self._events: Optional[Iterator[StepOutcome]] = None
        self._result: Optional[R] = None
        self._finished = False
        self._error: Optional[BaseException] = None
        self._steps = 0
        self.last_outcome: Optional[StepOutcome] = None

    @abstractmethod
    def _run(self) -> Iterator[StepOutcome]:
        """Generator performing the algorithm."""

    def _check_failed(self) -> None:
        if self._error is not None:
            raise RuntimeError(f"{type(self).__name__} failed") from self._error

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def steps(self) -> int:
        """Number of units of work performed so far."""
        return self._steps

    def step(self) -> StepOutcome:
        """
        Perform one unit of work.

        Returns:
            The outcome of that unit, or a FINISHED outcome once the
            algorithm has terminated. Never blocks.

        Raises:
            RuntimeError: If an earlier step raised; the original error is
                chained as the cause.
        """
        self._check_failed()
        if self._finished:
            return FINISHED
        if self._events is None:
            self._events = self._run()
        try:
            outcome = next(self._events)
        except StopIteration:
            self._finished = True
            outcome = FINISHED
        except Exception as exc:
            self._error = exc
            raise
        else:
            self._steps += 1
        self.last_outcome = outcome
        return outcome

    def __iter__(self) -> Iterator[StepOutcome]:
        while True:
            outcome = self.step()
            if outcome.finished:
                return
            yield outcome

    def run(self) -> R:
        """Run to completion and return the result."""
        for _ in self:
            pass
        return self.result()

    def result(self) -> R:
        """
        Return the final result.

        Raises:
            RuntimeError: If the stepper has not finished or a step raised.
        """
        self._check_failed()
        if not self._finished:
            raise RuntimeError(f"{type(self).__name__} has not finished")
        return self._result  # type: ignore[return-value]

    def __repr__(self) -> str:
        state = "finished" if self._finished else f"{self._steps} steps"
        return f"{type(self).__name__}({state})"
