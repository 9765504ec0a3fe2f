"""
Conflict detection.

Two checks live here:
- has_conflict(): the gate used by the solver before committing a course
- find_conflicts(): an audit over a finished schedule (or any course list)

Overlap rule (half-open intervals, same day only):
    start < other_end AND other_start < end
"""

from __future__ import annotations

from typing import Iterable

from unitplan.model import Course, ScheduledTime
from unitplan.timeparse import TimeInterval


def has_conflict(scheduled_times: Iterable[ScheduledTime], interval: TimeInterval) -> bool:
    """
    True if `interval` overlaps any already committed slot of that day.
    """
    for scheduled in scheduled_times:
        if scheduled.interval.overlaps(interval):
            return True
    return False


def find_conflicts(courses: list[Course]) -> list[tuple[Course, Course]]:
    """
    Audit a set of chosen courses: return every clashing pair in input
    order. Courses on different days never clash.
    """
    conflicts: list[tuple[Course, Course]] = []

    # O(n^2) is fine for one student's weekly timetable
    for i in range(len(courses)):
        a = courses[i]
        for j in range(i + 1, len(courses)):
            b = courses[j]
            if a.day != b.day:
                continue
            if a.interval.overlaps(b.interval):
                conflicts.append((a, b))

    return conflicts
