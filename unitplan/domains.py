"""
Domain building.

Turns the validated course list into search-ready UnitDomain objects:
every unit gets one ActivityDomain per distinct activity code, holding all
course options for that activity in their original order.
"""

from __future__ import annotations

from typing import Mapping

from unitplan.model import ActivityDomain, Course, UnitData, UnitDomain


def group_activities(unit: UnitData) -> UnitDomain:
    """
    Group a unit's courses by activity code.

    Grouping is stable (input order is kept inside a group, groups appear in
    order of first occurrence) and total (every course lands in one group).
    Required activities without any course get an empty group.
    """
    groups: dict[str, list[Course]] = {a: [] for a in unit.activities}
    for course in unit.courses:
        groups.setdefault(course.activity, []).append(course)

    return UnitDomain(
        unit_code=unit.unit_code,
        unit_name=unit.unit_name,
        activities=[ActivityDomain(activity=a, courses=cs) for a, cs in groups.items()],
    )


def build_unit_domains(course_list: Mapping[str, UnitData]) -> list[UnitDomain]:
    return [group_activities(unit) for unit in course_list.values()]


def find_empty_activity(domains: list[UnitDomain]) -> tuple[str, str | None] | None:
    """
    Return (unit_code, activity) of the first activity without options.

    A unit without any activity at all is reported as (unit_code, None):
    nothing could ever be scheduled for it.
    """
    for unit in domains:
        if not unit.activities:
            return unit.unit_code, None
        for activity in unit.activities:
            if not activity.courses:
                return unit.unit_code, activity.activity
    return None
