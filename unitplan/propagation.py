"""
Forward checking.

After a course is tentatively chosen, every option in the not-yet-scheduled
units that overlaps it on the same day can never be picked. Removing those
options up front lets the solver notice a dead end (an activity with no
options left) before descending into it.

The input snapshot is never modified: each call returns a fresh copy, so a
sibling branch of the search never sees pruning done by another branch.
"""

from __future__ import annotations

from unitplan.model import ActivityDomain, UnitDomain
from unitplan.timeparse import TimeInterval


def forward_check(domains: list[UnitDomain], day: str, interval: TimeInterval) -> list[UnitDomain]:
    pruned: list[UnitDomain] = []
    for unit in domains:
        activities = [
            ActivityDomain(
                activity=activity.activity,
                courses=[c for c in activity.courses if c.day != day or not interval.overlaps(c.interval)],
            )
            for activity in unit.activities
        ]
        pruned.append(UnitDomain(unit_code=unit.unit_code, unit_name=unit.unit_name, activities=activities))
    return pruned


def has_wipeout(domains: list[UnitDomain]) -> bool:
    """
    True if any activity of any unit has no options left.
    """
    for unit in domains:
        for activity in unit.activities:
            if not activity.courses:
                return True
    return False


def prune(domains: list[UnitDomain], day: str, interval: TimeInterval) -> list[UnitDomain] | None:
    """
    Forward check and reject the result on a wipeout (returns None).
    """
    pruned = forward_check(domains, day, interval)
    if has_wipeout(pruned):
        return None
    return pruned
