"""
Exceptions raised by unitplan.

Two failure classes are kept apart:
- malformed input -> InputValidationError (and subclasses)
- no conflict-free schedule -> NOT an exception, the solver returns None

SearchBudgetExceeded is only raised when a caller asked for a node limit.
"""

from __future__ import annotations


class InputValidationError(ValueError):
    """Base class for malformed course data."""

    def __init__(self, message: str, unit_code: str | None = None, index: int | None = None):
        self.unit_code = unit_code
        self.index = index
        location = ""
        if unit_code:
            location += f" in unit '{unit_code}'"
        if index is not None:
            location += f" at course #{index}"
        super().__init__(f"Invalid course data{location}: {message}")


class TimeParseError(InputValidationError):
    """Time range text is not 'H:MMam - H:MMpm'."""


class UnknownDayError(InputValidationError):
    """Day code is not one of MON..SUN."""


class InvalidCourseError(InputValidationError):
    """A course entry is missing required fields or has the wrong shape."""


class SearchBudgetExceeded(RuntimeError):
    """The search explored more nodes than the caller allowed."""

    def __init__(self, nodes: int, limit: int):
        self.nodes = nodes
        self.limit = limit
        super().__init__(f"Search aborted after {nodes} nodes (limit {limit})")
