"""Configuration classes for the critical path solver."""

from enum import Enum

from pydantic import BaseModel


class CriticalPathMode(str, Enum):
    """Available critical path solvers."""

    SLACK = "slack"  # Calendar-aware backward pass over total float
    LEGACY_ADJACENCY = "legacy_adjacency"  # Calendar-naive walk over touching dates


class GapStrategyType(str, Enum):
    """How the gap between a predecessor and a successor is measured."""

    FINISH_TO_START = "finish_to_start"  # predecessor end -> successor start, every type
    TYPED = "typed"  # driving dates chosen by dependency type


class CriticalPathConfig(BaseModel):
    """Configuration for critical path computation."""

    mode: CriticalPathMode = CriticalPathMode.SLACK
    gap_strategy: GapStrategyType = GapStrategyType.FINISH_TO_START
