"""
unitplan - conflict-free weekly timetables for a set of university units.

    from unitplan import schedule

    result = schedule(course_list)   # None if no clash-free timetable exists
"""

from unitplan.exceptions import (
    InputValidationError,
    InvalidCourseError,
    SearchBudgetExceeded,
    TimeParseError,
    UnknownDayError,
)
from unitplan.solver import Scheduler, schedule

__all__ = [
    "schedule",
    "Scheduler",
    "InputValidationError",
    "InvalidCourseError",
    "SearchBudgetExceeded",
    "TimeParseError",
    "UnknownDayError",
]
