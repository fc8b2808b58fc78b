"""Unit tests for the pure dependency graph traversal."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from taskflow.domain.models.task_dependency import DependencyType, TaskDependency
from taskflow.domain.services.dependency_graph import (
    build_adjacency,
    cycle_path_for_new_edge,
    find_cycle,
    trace_dependency_path,
)

_NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _edge(
    task_id: str,
    depends_on: str,
    dependency_type: DependencyType = DependencyType.BLOCKS,
) -> TaskDependency:
    return TaskDependency(
        id=f"{task_id}->{depends_on}",
        task_id=task_id,
        depends_on_task_id=depends_on,
        dependency_type=dependency_type,
        created_by=None,
        created_at=_NOW,
    )


class TestBuildAdjacency:
    def test_skips_relates_to_edges_by_default(self) -> None:
        edges = [_edge("A", "B"), _edge("A", "C", DependencyType.RELATES_TO)]

        assert build_adjacency(edges) == {"A": ["B"]}

    def test_includes_relates_to_when_asked(self) -> None:
        edges = [_edge("A", "B"), _edge("A", "C", DependencyType.RELATES_TO)]

        assert build_adjacency(edges, blocking_only=False) == {"A": ["B", "C"]}


class TestTraceDependencyPath:
    def test_returns_path_when_reachable(self) -> None:
        adjacency = {"A": ["B"], "B": ["C"], "C": ["D"]}

        path = trace_dependency_path("A", "D", lambda n: adjacency.get(n, ()))

        assert path == ["A", "B", "C", "D"]

    def test_returns_none_when_unreachable(self) -> None:
        adjacency = {"A": ["B"], "C": ["A"]}

        assert trace_dependency_path("A", "C", lambda n: adjacency.get(n, ())) is None

    def test_start_equals_target(self) -> None:
        assert trace_dependency_path("A", "A", lambda n: ()) == ["A"]

    def test_tolerates_existing_cycles_in_input(self) -> None:
        adjacency = {"A": ["B"], "B": ["A"]}

        assert trace_dependency_path("A", "Z", lambda n: adjacency.get(n, ())) is None

    def test_deep_chain_does_not_hit_recursion_limit(self) -> None:
        depth = 20_000
        adjacency = {f"n{i}": [f"n{i + 1}"] for i in range(depth)}

        path = trace_dependency_path("n0", f"n{depth}", lambda n: adjacency.get(n, ()))

        assert path is not None
        assert len(path) == depth + 1


class TestCyclePathForNewEdge:
    def test_reverse_edge_closes_cycle(self) -> None:
        adjacency = build_adjacency([_edge("A", "B")])

        assert cycle_path_for_new_edge("B", "A", adjacency) == ("B", "A", "B")

    def test_transitive_cycle_path(self) -> None:
        adjacency = build_adjacency([_edge("A", "B"), _edge("B", "C")])

        assert cycle_path_for_new_edge("C", "A", adjacency) == ("C", "A", "B", "C")

    def test_self_pair_reports_trivial_cycle(self) -> None:
        assert cycle_path_for_new_edge("X", "X", {}) == ("X", "X")

    def test_independent_edge_is_acyclic(self) -> None:
        adjacency = build_adjacency([_edge("A", "B")])

        assert cycle_path_for_new_edge("C", "A", adjacency) is None

    def test_relates_to_edges_do_not_create_cycles(self) -> None:
        adjacency = build_adjacency([_edge("A", "B", DependencyType.RELATES_TO)])

        assert cycle_path_for_new_edge("B", "A", adjacency) is None


class TestFindCycle:
    def test_acyclic_graph(self) -> None:
        assert find_cycle({"A": ["B", "C"], "B": ["C"], "C": []}) is None

    @pytest.mark.parametrize(
        "adjacency",
        [
            {"A": ["A"]},
            {"A": ["B"], "B": ["A"]},
            {"A": ["B"], "B": ["C"], "C": ["A"]},
            {"X": ["Y"], "A": ["B"], "B": ["C"], "C": ["B"]},
        ],
    )
    def test_reports_closed_cycle(self, adjacency: dict[str, list[str]]) -> None:
        cycle = find_cycle(adjacency)

        assert cycle is not None
        assert cycle[0] == cycle[-1]
        for src, dst in zip(cycle, cycle[1:]):
            assert dst in adjacency[src]
