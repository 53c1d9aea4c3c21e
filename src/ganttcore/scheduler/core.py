"""Core dataclasses for the scheduling engine."""

from dataclasses import dataclass, field
from datetime import date

from ..models import DependencyType


def _default_str_list() -> list[str]:
    return []


def _default_str_set() -> set[str]:
    return set()


def _default_slack() -> dict[str, int]:
    return {}


@dataclass(frozen=True)
class Edge:
    """An outgoing dependency edge in the task graph."""

    source_id: str
    target_id: str
    type: DependencyType = DependencyType.FS


@dataclass
class CriticalPathResult:
    """Result of a critical path computation."""

    critical_ids: set[str]
    project_finish: date | None
    slack: dict[str, int] = field(default_factory=_default_slack)
    cycle_members: set[str] = field(default_factory=_default_str_set)
    warnings: list[str] = field(default_factory=_default_str_list)

    def is_critical(self, task_id: str) -> bool:
        """Return True if the task is on the critical path."""
        return task_id in self.critical_ids
