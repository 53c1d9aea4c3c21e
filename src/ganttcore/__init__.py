"""ganttcore - calendar-aware project scheduling engine."""

__version__ = "0.1.0"
