"""
Result assembly.

ScheduleBuilder owns the two pieces of mutable search state:
- the final schedule (unit code -> unit name + chosen courses)
- the committed time slots per day, used for conflict checks

Both grow by exactly one entry per commit and shrink by one on backtrack.
Commitments are strictly nested (they follow the recursion), so commit()
is a context manager that always undoes its push unless the branch was
kept, even when the search is aborted by an exception.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from unitplan.model import DAY_CODES, Course, FinalSchedule, ScheduledTime, UnitDomain


class Commitment:
    def __init__(self) -> None:
        self.kept = False

    def keep(self) -> None:
        """Mark this commitment as part of the final answer."""
        self.kept = True


class ScheduleBuilder:
    def __init__(self) -> None:
        self.schedule: FinalSchedule = {}
        self.times_per_day: dict[str, list[ScheduledTime]] = {day: [] for day in DAY_CODES}

    def begin_unit(self, unit: UnitDomain) -> None:
        """
        Create the (empty) entry for a unit as soon as it is selected.
        """
        self.schedule[unit.unit_code] = {"unitName": unit.unit_name, "courses": []}

    def drop_unit(self, unit_code: str) -> None:
        self.schedule.pop(unit_code, None)

    def times_for(self, day: str) -> list[ScheduledTime]:
        return self.times_per_day[day]

    @contextmanager
    def commit(self, unit_code: str, course: Course) -> Iterator[Commitment]:
        courses: list[Course] = self.schedule[unit_code]["courses"]
        times = self.times_per_day[course.day]

        courses.append(course)
        times.append(ScheduledTime(course.day, course.interval, unit_code, course.activity))
        commitment = Commitment()
        try:
            yield commitment
        finally:
            if not commitment.kept:
                courses.pop()
                times.pop()

    def committed_courses(self) -> list[Course]:
        out: list[Course] = []
        for entry in self.schedule.values():
            out.extend(entry["courses"])
        return out

    def as_course_list(self) -> FinalSchedule:
        """
        Return the schedule as built. No sorting, no post-processing.
        """
        return self.schedule
