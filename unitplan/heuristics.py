"""
Variable and value ordering.

- MRV (minimum remaining values): schedule the unit / activity with the
  fewest remaining course options first, so dead ends show up early.
- LCV (least constraining value): try the course that removes the fewest
  options from the units that are still unscheduled.

All orderings are stable, so identical input always yields identical output.
"""

from __future__ import annotations

from unitplan.model import ActivityDomain, Course, UnitDomain


def select_next_unit(domains: list[UnitDomain]) -> UnitDomain:
    """
    Pick the unit with the smallest total domain size.
    Ties go to the unit that came first in the input.
    """
    if not domains:
        raise ValueError("No units left to select from")
    return min(domains, key=lambda unit: unit.domain_size)


def order_activities(unit: UnitDomain) -> list[ActivityDomain]:
    return sorted(unit.activities, key=lambda activity: len(activity.courses))


def calculate_impact(course: Course, domains: list[UnitDomain]) -> int:
    """
    Count the options in `domains` that committing `course` would rule out
    (same day, overlapping time).
    """
    interval = course.interval
    impact = 0
    for unit in domains:
        for activity in unit.activities:
            for other in activity.courses:
                if other.day != course.day:
                    continue
                if interval.overlaps(other.interval):
                    impact += 1
    return impact


def order_by_lcv(courses: list[Course], domains: list[UnitDomain]) -> list[Course]:
    """
    Return the courses sorted by ascending impact on the remaining units.
    The given list is left untouched.
    """
    impacts = {id(c): calculate_impact(c, domains) for c in courses}
    return sorted(courses, key=lambda c: impacts[id(c)])
