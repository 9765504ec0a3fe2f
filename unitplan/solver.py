"""
Backtracking scheduler.

Picks exactly one course per activity for every unit so that no two chosen
courses overlap on the same day. All units share one calendar: a student
cannot attend two classes at once, regardless of which unit they belong to.

Search outline:

    schedule_units(remaining):
        no units left               -> success
        U = unit with fewest options (MRV)
        schedule_activities(U, 0)

    schedule_activities(U, i):
        all activities done         -> schedule_units(remaining without U)
        for course in activity i ordered by LCV:
            skip if it clashes with a committed slot
            skip if forward checking empties some activity
            commit course, recurse with the pruned domains
            success -> keep the commit and return
            failure -> undo the commit, try the next course
        -> failure (parent backtracks)

The search is deterministic and single-threaded. It has no time limit of its
own; callers that need one pass node_limit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from unitplan.conflicts import has_conflict
from unitplan.domains import build_unit_domains, find_empty_activity
from unitplan.exceptions import SearchBudgetExceeded
from unitplan.heuristics import order_activities, order_by_lcv, select_next_unit
from unitplan.model import ActivityDomain, FinalSchedule, UnitDomain, load_course_list, schedule_to_dict
from unitplan.propagation import prune
from unitplan.result import ScheduleBuilder

logger = logging.getLogger(__name__)


@dataclass
class SearchStats:
    nodes: int = 0
    backtracks: int = 0


class Scheduler:
    """
    One scheduler instance can be reused, but every run() builds its own
    domains and result state; nothing is shared between runs.
    """

    def __init__(self, node_limit: int | None = None):
        if node_limit is not None and node_limit <= 0:
            raise ValueError("node_limit must be a positive integer")
        self.node_limit = node_limit
        self.stats = SearchStats()

    def run(self, course_list: Mapping[str, Any]) -> FinalSchedule | None:
        """
        Validate the course list and search for a conflict-free schedule.

        Returns None if no such schedule exists.
        Raises InputValidationError for malformed input and
        SearchBudgetExceeded if node_limit was hit.
        """
        self.stats = SearchStats()
        units = load_course_list(course_list)
        domains = build_unit_domains(units)

        empty = find_empty_activity(domains)
        if empty is not None:
            unit_code, activity = empty
            logger.warning("Unit %s has no options for activity %s; no schedule possible", unit_code, activity)
            return None

        logger.info(
            "Scheduling %d units (%d activities, %d options)",
            len(domains),
            sum(len(u.activities) for u in domains),
            sum(u.domain_size for u in domains),
        )

        builder = ScheduleBuilder()
        found = self._schedule_units(domains, builder)

        logger.info(
            "Search finished: %s after %d nodes, %d backtracks",
            "schedule found" if found else "infeasible",
            self.stats.nodes,
            self.stats.backtracks,
        )
        return builder.as_course_list() if found else None

    def _tick(self) -> None:
        self.stats.nodes += 1
        if self.node_limit is not None and self.stats.nodes > self.node_limit:
            raise SearchBudgetExceeded(self.stats.nodes, self.node_limit)

    def _schedule_units(self, domains: list[UnitDomain], builder: ScheduleBuilder) -> bool:
        if not domains:
            return True

        unit = select_next_unit(domains)
        remaining = [u for u in domains if u is not unit]

        builder.begin_unit(unit)
        activities = order_activities(unit)

        if self._schedule_activities(unit, activities, 0, remaining, builder):
            return True

        builder.drop_unit(unit.unit_code)
        return False

    def _schedule_activities(
        self,
        unit: UnitDomain,
        activities: list[ActivityDomain],
        index: int,
        remaining: list[UnitDomain],
        builder: ScheduleBuilder,
    ) -> bool:
        if index >= len(activities):
            return self._schedule_units(remaining, builder)

        activity = activities[index]

        for course in order_by_lcv(activity.courses, remaining):
            self._tick()
            interval = course.interval

            if has_conflict(builder.times_for(course.day), interval):
                continue

            pruned = prune(remaining, course.day, interval)
            if pruned is None:
                continue

            with builder.commit(unit.unit_code, course) as commitment:
                if self._schedule_activities(unit, activities, index + 1, pruned, builder):
                    commitment.keep()
                    return True

            self.stats.backtracks += 1
            logger.debug("Backtrack: %s %s %s %s", unit.unit_code, activity.activity, course.day, course.time)

        return False


def schedule(course_list: Mapping[str, Any]) -> dict[str, Any] | None:
    """
    Pick one course per activity for every unit without any time clash.

    Input is a CourseList mapping (wire format); output is the same shape with
    exactly one course per activity, or None if no conflict-free assignment
    exists.
    """
    return schedule_to_dict(Scheduler().run(course_list))
