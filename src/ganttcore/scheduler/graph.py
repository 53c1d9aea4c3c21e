"""Dependency graph construction.

The graph is rebuilt from the current task and dependency lists on every
solver invocation; there is no persistent graph object.
"""

from collections.abc import Iterable

from ..models import Dependency, Task
from .core import Edge


def build_successors(
    tasks: Iterable[Task], dependencies: Iterable[Dependency]
) -> dict[str, list[Edge]]:
    """Map each task ID to its outgoing edges.

    Dependencies whose source or target is not in tasks are silently dropped.
    Every task gets an entry, possibly empty. Edge order follows dependency order.
    """
    adjacency: dict[str, list[Edge]] = {task.id: [] for task in tasks}
    for dep in dependencies:
        if dep.source_id in adjacency and dep.target_id in adjacency:
            adjacency[dep.source_id].append(Edge(dep.source_id, dep.target_id, dep.type))
    return adjacency


def build_predecessors(
    tasks: Iterable[Task], dependencies: Iterable[Dependency]
) -> dict[str, list[Edge]]:
    """Map each task ID to its incoming edges (same dropping rules as build_successors)."""
    adjacency: dict[str, list[Edge]] = {task.id: [] for task in tasks}
    for dep in dependencies:
        if dep.source_id in adjacency and dep.target_id in adjacency:
            adjacency[dep.target_id].append(Edge(dep.source_id, dep.target_id, dep.type))
    return adjacency

