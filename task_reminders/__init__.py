"""Personal recurring-task reminder service."""

__version__ = "0.1.0"
