"""Custom exceptions raised while loading opening hours schedules."""

from __future__ import annotations


class RuleValidationError(ValueError):
    """Raised when a rule or schedule payload fails schema validation."""


class ScheduleNotFoundError(KeyError):
    """Raised when a schedule name is not present in a repository."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Schedule '{name}' is not loaded")
        self.name = name


__all__ = ["RuleValidationError", "ScheduleNotFoundError"]
