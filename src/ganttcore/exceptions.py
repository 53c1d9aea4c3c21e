"""Custom exceptions for ganttcore."""


class GanttError(Exception):
    """Base exception for all ganttcore errors."""

    pass


class ValidationError(GanttError):
    """Raised when validation fails."""

    pass


class MissingReferenceError(ValidationError):
    """Raised when a referenced task ID does not exist."""

    pass


class SelfDependencyError(ValidationError):
    """Raised when a dependency would link a task to itself."""

    pass


class DuplicateDependencyError(ValidationError):
    """Raised when a dependency already exists for the same (source, target) pair."""

    pass


class ParseError(GanttError):
    """Raised when a project file cannot be read or decoded."""

    pass
