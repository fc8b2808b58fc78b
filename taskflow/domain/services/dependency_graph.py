"""Graph traversal over BLOCKS dependency edges.

Edges point from a dependent task to its prerequisite. Adding the edge
(task -> prerequisite) closes a cycle exactly when `task` is already
reachable from `prerequisite` by following existing edges.

Traversals are iterative (explicit stack plus visited set) so a long
prerequisite chain cannot exhaust the interpreter's recursion limit.

Usage:
    adjacency = build_adjacency(edges)
    path = cycle_path_for_new_edge("A", "B", adjacency)
    if path is not None:
        raise CycleDetectedError("A", "B", path)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping

from taskflow.domain.models.task_dependency import TaskDependency

_VISITING = 1
_DONE = 2


def build_adjacency(
    edges: Iterable[TaskDependency],
    *,
    blocking_only: bool = True,
) -> dict[str, list[str]]:
    """Map each dependent task id to its prerequisite ids.

    Args:
        edges: Dependency edges.
        blocking_only: Skip RELATES_TO edges (the default for cycle work).

    Returns:
        Adjacency lists in edge order.
    """
    adjacency: dict[str, list[str]] = {}
    for edge in edges:
        if blocking_only and not edge.is_blocking:
            continue
        adjacency.setdefault(edge.task_id, []).append(edge.depends_on_task_id)
    return adjacency


def trace_dependency_path(
    start: str,
    target: str,
    neighbors: Callable[[str], Iterable[str]],
) -> list[str] | None:
    """Find a path from `start` to `target` by depth-first search.

    Args:
        start: Node to start from.
        target: Node to reach.
        neighbors: Returns the prerequisites of a node.

    Returns:
        The node path `[start, ..., target]`, or None if unreachable.
    """
    if start == target:
        return [start]

    parents: dict[str, str | None] = {start: None}
    stack = [start]
    while stack:
        node = stack.pop()
        for nxt in neighbors(node):
            if nxt in parents:
                continue
            parents[nxt] = node
            if nxt == target:
                path = [nxt]
                cursor = parents[nxt]
                while cursor is not None:
                    path.append(cursor)
                    cursor = parents[cursor]
                path.reverse()
                return path
            stack.append(nxt)
    return None


def cycle_path_for_new_edge(
    task_id: str,
    depends_on_task_id: str,
    adjacency: Mapping[str, Iterable[str]],
) -> tuple[str, ...] | None:
    """Cycle that the edge (task_id -> depends_on_task_id) would close.

    Returns:
        The cycle as `(task_id, depends_on_task_id, ..., task_id)`, or None
        if the edge keeps the graph acyclic. A self pair yields
        `(task_id, task_id)`.
    """
    if task_id == depends_on_task_id:
        return (task_id, task_id)

    path = trace_dependency_path(
        depends_on_task_id,
        task_id,
        lambda node: adjacency.get(node, ()),
    )
    if path is None:
        return None
    return (task_id, *path)


def find_cycle(adjacency: Mapping[str, Iterable[str]]) -> tuple[str, ...] | None:
    """Return any directed cycle in the graph, or None if it is acyclic.

    The cycle is reported as a closed walk: first and last node are equal.
    """
    state: dict[str, int] = {}
    for root in list(adjacency):
        if root in state:
            continue
        state[root] = _VISITING
        path = [root]
        iterators = [iter(adjacency.get(root, ()))]
        while iterators:
            advanced = False
            for nxt in iterators[-1]:
                seen = state.get(nxt)
                if seen is None:
                    state[nxt] = _VISITING
                    path.append(nxt)
                    iterators.append(iter(adjacency.get(nxt, ())))
                    advanced = True
                    break
                if seen == _VISITING:
                    start = path.index(nxt)
                    return (*path[start:], nxt)
            if not advanced:
                state[path.pop()] = _DONE
                iterators.pop()
    return None
