from __future__ import annotations

from typing import Any, Optional


class SchedulerError(Exception):
    """Base class for all simulator errors."""


class InvariantViolation(SchedulerError):
    """
    A caller broke a queue-membership contract.

    This is a programming defect, never a user error; it is raised instead
    of silently continuing with an inconsistent scheduling table.
    """


class ConfigurationError(SchedulerError, ValueError):
    """Malformed simulation configuration or workload entry."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.field = field
        self.value = value
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.field and self.value is not None:
            return f"Invalid '{self.field}' (value={self.value!r}): {self.message}"
        if self.field:
            return f"Invalid '{self.field}': {self.message}"
        return self.message
