"""Global application context and state management."""

from __future__ import annotations

from pathlib import Path


class _Context:
    """Application context holding state set by the CLI callback."""

    def __init__(self) -> None:
        self.config_path: Path | None = None


# Singleton instance
_context = _Context()


def get_config_path() -> Path | None:
    """Get the engine config path given on the command line, if any."""
    return _context.config_path


def set_config_path(path: Path | None) -> None:
    """Set the engine config path."""
    _context.config_path = path
