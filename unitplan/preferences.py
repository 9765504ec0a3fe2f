"""
Preference filters.

Each filter takes a validated course list and returns a NEW course list with
the courses that do not fit the preference removed. Filters never score or
reorder anything; they run before the solver, which stays unaware of them.

A filter may remove every option of an activity. The solver then reports
"no schedule" (None) instead of a partial timetable.

Per-combination preferences (max classes per day, avoiding back-to-back
classes) cannot be decided one course at a time and are not offered here.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, Mapping

from unitplan.exceptions import InputValidationError, UnknownDayError
from unitplan.model import DAY_CODES, Course, UnitData
from unitplan.timeparse import parse_clock

# Granularity of availability grids ("9:00", "9:30", ...)
SLOT_MINUTES = 30

CourseList = Mapping[str, UnitData]


def _filter_courses(course_list: CourseList, keep: Callable[[Course], bool]) -> dict[str, UnitData]:
    return {
        code: replace(unit, courses=tuple(c for c in unit.courses if keep(c)))
        for code, unit in course_list.items()
    }


def normalize_days(days: Iterable[str]) -> set[str]:
    out: set[str] = set()
    for d in days:
        code = str(d).strip().upper()[:3]
        if code not in DAY_CODES:
            raise UnknownDayError(f"unknown day {d!r}")
        out.add(code)
    return out


def filter_by_start_time(course_list: CourseList, earliest: str) -> dict[str, UnitData]:
    """
    Drop courses that start before `earliest` (e.g. "9:00am").
    """
    limit = parse_clock(earliest)
    return _filter_courses(course_list, lambda c: c.interval.start >= limit)


def filter_by_end_time(course_list: CourseList, latest: str) -> dict[str, UnitData]:
    """
    Drop courses that end after `latest` (e.g. "5:00pm").
    """
    limit = parse_clock(latest)
    return _filter_courses(course_list, lambda c: c.interval.end <= limit)


def filter_by_days(course_list: CourseList, days: Iterable[str]) -> dict[str, UnitData]:
    allowed = normalize_days(days)
    return _filter_courses(course_list, lambda c: c.day in allowed)


def _slot_to_minutes(slot: str) -> int:
    # Availability grids use 24h "H:MM"
    parts = slot.strip().split(":")
    if len(parts) != 2 or not parts[0].isdigit() or not parts[1].isdigit():
        raise InputValidationError(f"invalid availability slot {slot!r}")
    return int(parts[0]) * 60 + int(parts[1])


def filter_by_availability(course_list: CourseList, study_times: Mapping[str, list[str]]) -> dict[str, UnitData]:
    """
    Keep only courses that fit completely into the available study times.

    study_times maps a day code to the start times ("H:MM", 24h) of the
    30-minute slots the student is available for, e.g.
        {"MON": ["9:00", "9:30", "10:00"]}
    A course from 9:00 to 10:00 needs "9:00" and "9:30". Days that are not
    listed count as fully unavailable.
    """
    available: dict[str, set[int]] = {}
    for day, slots in study_times.items():
        (code,) = normalize_days([day])
        available[code] = {_slot_to_minutes(s) for s in slots}

    def fits(course: Course) -> bool:
        slots = available.get(course.day)
        if not slots:
            return False
        interval = course.interval
        return all(t in slots for t in range(interval.start, interval.end, SLOT_MINUTES))

    return _filter_courses(course_list, fits)


def filter_locked(course_list: CourseList, locked_ids: Iterable[str]) -> dict[str, UnitData]:
    """
    A locked course becomes the only option of its activity.

    Locking is per (unit, activity); if several courses of the same activity
    are locked, the last one wins. Unknown ids are ignored.
    """
    wanted = {str(x).strip() for x in locked_ids if str(x).strip()}
    locked: dict[tuple[str, str], str] = {}
    for unit in course_list.values():
        for c in unit.courses:
            if c.id in wanted:
                locked[(c.unit_code, c.activity)] = c.id

    def keep(course: Course) -> bool:
        lock = locked.get((course.unit_code, course.activity))
        return lock is None or lock == course.id

    return _filter_courses(course_list, keep)


@dataclass
class Preferences:
    earliest: str | None = None
    latest: str | None = None
    days: list[str] = field(default_factory=list)
    study_times: dict[str, list[str]] | None = None
    locked_ids: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.earliest or self.latest or self.days or self.study_times is not None or self.locked_ids)


def apply_preferences(course_list: CourseList, prefs: Preferences) -> dict[str, UnitData]:
    """
    Run all configured filters. Locks are applied first so that a locked
    course still has to satisfy the other preferences.
    """
    out = dict(course_list)
    if prefs.locked_ids:
        out = filter_locked(out, prefs.locked_ids)
    if prefs.earliest:
        out = filter_by_start_time(out, prefs.earliest)
    if prefs.latest:
        out = filter_by_end_time(out, prefs.latest)
    if prefs.days:
        out = filter_by_days(out, prefs.days)
    if prefs.study_times is not None:
        out = filter_by_availability(out, prefs.study_times)
    return out
