"""Tests for step-by-step algorithm execution."""

import pytest

from graphwalk.graphs import (
    UNREACHABLE,
    AStarStepper,
    BellmanFordStepper,
    BfsStepper,
    CycleSearchStepper,
    DijkstraStepper,
    Edge,
    FloydWarshallStepper,
    GraphModel,
    GridGraph,
    InvalidNode,
    KahnStepper,
    KruskalStepper,
    NegativeWeightError,
    PrimStepper,
    StepKind,
    dijkstra,
    manhattan_heuristic,
)


def _kinds(stepper):
    return [outcome.kind for outcome in stepper]


class TestStepperProtocol:
    """Tests for the shared Stepper behaviour."""

    def test_result_before_finish_raises(self):
        """Test that result() needs a finished stepper."""
        stepper = DijkstraStepper(GraphModel(2, [(0, 1, 1)]), 0)
        with pytest.raises(RuntimeError, match="has not finished"):
            stepper.result()
        stepper.step()
        with pytest.raises(RuntimeError):
            stepper.result()

    def test_step_after_finish_keeps_reporting_finished(self):
        """Test that stepping a finished stepper is a no-op."""
        stepper = DijkstraStepper(GraphModel(1), 0)
        assert stepper.step().kind is StepKind.POP
        assert stepper.step().finished
        assert stepper.step().finished
        assert stepper.finished
        assert stepper.steps == 1

    def test_run_equals_one_shot_function(self):
        """Test that running a stepper gives the function's result."""
        G = GraphModel(4, [(0, 1, 2), (1, 2, 2), (0, 2, 5), (2, 3, 1)])
        stepped = DijkstraStepper(G, 0).run()
        assert stepped.table.distances() == dijkstra(G, 0).table.distances()

    def test_run_after_partial_stepping(self):
        """Test that run() resumes where step() left off."""
        G = GraphModel(3, [(0, 1, 1), (1, 2, 2), (0, 2, 5)])
        stepper = DijkstraStepper(G, 0)
        stepper.step()
        stepper.step()
        assert stepper.run().distance(2) == 3
        assert stepper.steps == 7

    def test_last_outcome(self):
        """Test that the latest outcome is remembered."""
        stepper = DijkstraStepper(GraphModel(2, [(0, 1, 3)]), 0)
        assert stepper.last_outcome is None
        outcome = stepper.step()
        assert stepper.last_outcome is outcome

    def test_error_in_step_is_not_a_finish(self):
        """Test that a raising step leaves the stepper failed, not finished."""

        def heuristic(node, goal):
            if node == 2:
                raise KeyError(node)
            return 0

        stepper = AStarStepper(GraphModel(3, [(0, 1, 1), (1, 2, 1)]), 0, 2, heuristic)
        assert [stepper.step().kind for _ in range(3)] == [
            StepKind.POP,
            StepKind.RELAX,
            StepKind.POP,
        ]
        with pytest.raises(KeyError):
            stepper.step()

        assert not stepper.finished
        with pytest.raises(RuntimeError, match="AStarStepper failed") as excinfo:
            stepper.step()
        assert isinstance(excinfo.value.__cause__, KeyError)
        with pytest.raises(RuntimeError, match="AStarStepper failed"):
            stepper.result()
        with pytest.raises(RuntimeError, match="AStarStepper failed"):
            stepper.run()

    def test_validation_at_construction(self):
        """Test that invalid input is rejected before any step."""
        with pytest.raises(InvalidNode):
            DijkstraStepper(GraphModel(1), 4)
        with pytest.raises(NegativeWeightError):
            DijkstraStepper(GraphModel(2, [(0, 1, -1)]), 0)
        with pytest.raises(ValueError):
            KruskalStepper(GraphModel(2, [(0, 1, 1)]))


class TestDijkstraStepper:
    """Tests for DijkstraStepper."""

    def test_step_sequence(self):
        """Test the exact sequence of step kinds, including a stale pop."""
        G = GraphModel(3, [(0, 1, 1), (1, 2, 2), (0, 2, 5)])
        assert _kinds(DijkstraStepper(G, 0)) == [
            StepKind.POP,
            StepKind.RELAX,
            StepKind.RELAX,
            StepKind.POP,
            StepKind.RELAX,
            StepKind.POP,
            StepKind.STALE,
        ]

    def test_state_between_steps(self):
        """Test inspecting the table and frontier mid-run."""
        G = GraphModel(3, [(0, 1, 1), (1, 2, 2), (0, 2, 5)])
        stepper = DijkstraStepper(G, 0)

        stepper.step()
        assert stepper.current == 0
        assert stepper.table.distance(0) == 0
        assert stepper.table.distance(1) is UNREACHABLE

        stepper.step()
        stepper.step()
        assert [entry.priority for entry in stepper.frontier_contents()] == [1, 5]
        assert stepper.table.distance(2) == 5
        assert stepper.visited == {0}

        stepper.run()
        assert stepper.table.distance(2) == 3
        assert stepper.current is None

    def test_outcome_carries_edge(self):
        """Test that relax steps report the edge they used."""
        stepper = DijkstraStepper(GraphModel(2, [(0, 1, 4)]), 0)
        stepper.step()
        outcome = stepper.step()
        assert outcome.kind is StepKind.RELAX
        assert outcome.edge == Edge(0, 1, 4)
        assert outcome.node == 1


class TestAStarStepper:
    """Tests for AStarStepper."""

    def test_goal_pop_ends_search(self):
        """Test that nothing is expanded after the goal."""
        grid = GridGraph([[False] * 3 for _ in range(3)])
        stepper = AStarStepper(grid, 0, 1, manhattan_heuristic(grid))
        outcomes = list(stepper)
        assert outcomes[-1].kind is StepKind.POP
        assert outcomes[-1].node == 1
        assert stepper.result().path == (0, 1)
        assert stepper.closed == {0, 1}


class TestBellmanFordStepper:
    """Tests for BellmanFordStepper."""

    def test_converges_early(self):
        """Test that a pass without changes ends the run."""
        G = GraphModel(3, [(0, 1, 1), (1, 2, 2)])
        stepper = BellmanFordStepper(G, 0)
        assert _kinds(stepper) == [
            StepKind.RELAX,
            StepKind.RELAX,
            StepKind.PASS,
            StepKind.SKIP,
            StepKind.SKIP,
            StepKind.PASS,
        ]
        assert stepper.passes == 2

    def test_detection_pass_runs_without_convergence(self):
        """Test that a negative cycle forces the extra pass."""
        G = GraphModel(2, [(0, 1, 1), (1, 0, -2)])
        stepper = BellmanFordStepper(G, 0)
        result = stepper.run()
        assert stepper.passes == 2
        assert result.cycle == (0, 1)


class TestPrimStepper:
    """Tests for PrimStepper."""

    def test_step_sequence(self):
        """Test that the first step visits the start node."""
        G = GraphModel(3, [(0, 1, 1), (1, 2, 2), (0, 2, 3)], directed=False)
        stepper = PrimStepper(G, 0)
        assert _kinds(stepper) == [StepKind.POP, StepKind.ACCEPT, StepKind.ACCEPT]
        assert stepper.visited == {0, 1, 2}
        assert len(stepper.frontier_contents()) == 1

    def test_stale_edges_are_skipped(self):
        """Test that an edge to a tree node is discarded."""
        G = GraphModel(4, [(0, 1, 1), (0, 2, 3), (1, 2, 1), (2, 3, 10)], directed=False)
        stepper = PrimStepper(G, 0)
        kinds = _kinds(stepper)
        assert kinds == [
            StepKind.POP,
            StepKind.ACCEPT,
            StepKind.ACCEPT,
            StepKind.STALE,
            StepKind.ACCEPT,
        ]
        assert stepper.result().edges == (Edge(0, 1, 1), Edge(1, 2, 1), Edge(2, 3, 10))


class TestKruskalStepper:
    """Tests for KruskalStepper."""

    def test_accept_and_reject(self):
        """Test that a cycle-closing edge is rejected."""
        G = GraphModel(4, [(0, 1, 1), (1, 2, 1), (0, 2, 1), (2, 3, 5)], directed=False)
        stepper = KruskalStepper(G)
        assert _kinds(stepper) == [
            StepKind.ACCEPT,
            StepKind.ACCEPT,
            StepKind.REJECT,
            StepKind.ACCEPT,
        ]
        assert stepper.cursor == 4

    def test_partial_state(self):
        """Test the component structure after one acceptance."""
        G = GraphModel(3, [(0, 1, 1), (1, 2, 2)], directed=False)
        stepper = KruskalStepper(G)
        stepper.step()
        assert stepper.edges == [Edge(0, 1, 1)]
        assert stepper.disjoint_set.connected(0, 1)
        assert not stepper.disjoint_set.connected(1, 2)

    def test_stops_after_spanning(self):
        """Test that leftover edges are never examined."""
        G = GraphModel(3, [(0, 1, 1), (1, 2, 2), (0, 2, 3)], directed=False)
        stepper = KruskalStepper(G)
        stepper.run()
        assert stepper.cursor == 2


class TestKahnStepper:
    """Tests for KahnStepper."""

    def test_step_sequence(self):
        """Test pops and indegree updates on a diamond."""
        G = GraphModel(4, [(0, 1), (0, 2), (1, 3), (2, 3)])
        stepper = KahnStepper(G)
        assert _kinds(stepper) == [
            StepKind.POP,
            StepKind.DECREMENT,
            StepKind.DECREMENT,
            StepKind.POP,
            StepKind.DECREMENT,
            StepKind.POP,
            StepKind.DECREMENT,
            StepKind.POP,
        ]

    def test_prefix_between_steps(self):
        """Test that the order grows one pop at a time."""
        G = GraphModel(4, [(0, 1), (0, 2), (1, 3), (2, 3)])
        stepper = KahnStepper(G)
        for _ in range(4):
            stepper.step()
        assert stepper.order == [0, 1]
        assert stepper.indegree[3] == 2
        assert list(stepper.queue) == [2]


class TestCycleSearchStepper:
    """Tests for CycleSearchStepper."""

    def test_stack_between_steps(self):
        """Test the explicit DFS stack mid-search."""
        G = GraphModel(3, [(0, 1), (1, 2), (2, 0)])
        stepper = CycleSearchStepper(G)
        for _ in range(3):
            stepper.step()
        assert stepper.path() == [0, 1, 2]
        assert stepper.stack() == [(0, 1), (1, 1), (2, 0)]
        assert stepper.cycle == ()

        outcome = stepper.step()
        assert outcome.kind is StepKind.BACK_EDGE
        assert outcome.edge == Edge(2, 0)
        assert len(stepper.cycle) == 3

    def test_acyclic_sequence(self):
        """Test enter, skip and exit steps on a diamond."""
        G = GraphModel(4, [(0, 1), (0, 2), (1, 3), (2, 3)])
        kinds = _kinds(CycleSearchStepper(G))
        assert kinds == [
            StepKind.ENTER,  # 0
            StepKind.ENTER,  # 1
            StepKind.ENTER,  # 3
            StepKind.EXIT,  # 3
            StepKind.EXIT,  # 1
            StepKind.ENTER,  # 2
            StepKind.SKIP,  # 2 -> 3
            StepKind.EXIT,  # 2
            StepKind.EXIT,  # 0
        ]


class TestBfsStepper:
    """Tests for BfsStepper."""

    def test_queue_between_steps(self):
        """Test the live queue after expanding the source."""
        G = GraphModel(4, [(0, 1), (0, 2), (1, 3)])
        stepper = BfsStepper(G, 0)
        for _ in range(3):
            stepper.step()
        assert list(stepper.queue) == [1, 2]
        assert stepper.order == [0]


class TestFloydWarshallStepper:
    """Tests for FloydWarshallStepper."""

    def test_one_phase_per_node(self):
        """Test that each step admits one intermediate node."""
        G = GraphModel(3, [(0, 1, 1), (1, 2, 2)])
        stepper = FloydWarshallStepper(G)
        outcomes = list(stepper)
        assert [o.node for o in outcomes] == [0, 1, 2]
        assert all(o.kind is StepKind.PASS for o in outcomes)
        assert stepper.phase == 3

    def test_intermediate_matrix(self):
        """Test that paths through node 1 appear after phase 1."""
        G = GraphModel(3, [(0, 1, 1), (1, 2, 2)])
        stepper = FloydWarshallStepper(G)
        stepper.step()
        assert not stepper.reach[0, 2]
        assert stepper.matrix()[0, 2] == float("inf")
        stepper.step()
        assert stepper.reach[0, 2]
        assert stepper.dist[0, 2] == 3
