"""
Unit tests for domain building and the MRV / LCV orderings.
"""

import unittest

from unitplan.domains import build_unit_domains, find_empty_activity, group_activities
from unitplan.heuristics import calculate_impact, order_activities, order_by_lcv, select_next_unit
from unitplan.model import ActivityDomain, Course, UnitData, UnitDomain


def course(cid: str, unit: str, activity: str, day: str, time: str) -> Course:
    return Course(cid, unit, unit, "", activity, day, time, "", "")


def unit_data(code: str, *courses: Course) -> UnitData:
    return UnitData(unit_code=code, unit_name=code, courses=tuple(courses))


class TestDomainBuilder(unittest.TestCase):
    def test_grouping_is_stable_and_total(self) -> None:
        u = unit_data(
            "A",
            course("t1", "A", "TUT", "MON", "9:00am - 10:00am"),
            course("l1", "A", "LEC", "TUE", "9:00am - 10:00am"),
            course("t2", "A", "TUT", "WED", "9:00am - 10:00am"),
            course("t3", "A", "TUT", "THU", "9:00am - 10:00am"),
        )
        d = group_activities(u)
        self.assertEqual([a.activity for a in d.activities], ["TUT", "LEC"])
        self.assertEqual([c.id for c in d.activities[0].courses], ["t1", "t2", "t3"])
        self.assertEqual(d.domain_size, 4)

    def test_declared_activity_without_courses_stays(self) -> None:
        u = UnitData("A", "A", (course("l1", "A", "LEC", "MON", "9am - 10am"),), activities=("LEC", "TUT"))
        domains = build_unit_domains({"A": u})
        self.assertEqual(find_empty_activity(domains), ("A", "TUT"))

    def test_unit_without_courses_is_reported(self) -> None:
        domains = build_unit_domains({"A": unit_data("A")})
        self.assertEqual(find_empty_activity(domains), ("A", None))

    def test_well_formed_input_has_no_empty_activity(self) -> None:
        domains = build_unit_domains({"A": unit_data("A", course("l1", "A", "LEC", "MON", "9am - 10am"))})
        self.assertIsNone(find_empty_activity(domains))


class TestMRV(unittest.TestCase):
    def _domain(self, code: str, *sizes: int) -> UnitDomain:
        acts = []
        for i, n in enumerate(sizes):
            cs = [course(f"{code}{i}{k}", code, f"A{i}", "MON", "9am - 10am") for k in range(n)]
            acts.append(ActivityDomain(f"A{i}", cs))
        return UnitDomain(code, code, acts)

    def test_smallest_total_domain_first(self) -> None:
        units = [self._domain("X", 2, 2), self._domain("Y", 1, 2), self._domain("Z", 3, 3)]
        self.assertEqual(select_next_unit(units).unit_code, "Y")

    def test_tie_goes_to_input_order(self) -> None:
        units = [self._domain("X", 1, 2), self._domain("Y", 3), self._domain("Z", 2, 1)]
        self.assertEqual(select_next_unit(units).unit_code, "X")

    def test_activities_sorted_by_size(self) -> None:
        u = self._domain("X", 3, 1, 2, 1)
        self.assertEqual([a.activity for a in order_activities(u)], ["A1", "A3", "A2", "A0"])
        # the unit itself is not reordered
        self.assertEqual([a.activity for a in u.activities], ["A0", "A1", "A2", "A3"])

    def test_empty_list_rejected(self) -> None:
        with self.assertRaises(ValueError):
            select_next_unit([])


class TestLCV(unittest.TestCase):
    def setUp(self) -> None:
        self.other = UnitDomain(
            "B",
            "B",
            [
                ActivityDomain(
                    "LEC",
                    [
                        course("b1", "B", "LEC", "MON", "9:00am - 10:00am"),
                        course("b2", "B", "LEC", "MON", "9:30am - 10:30am"),
                        course("b3", "B", "LEC", "TUE", "9:00am - 10:00am"),
                    ],
                ),
                ActivityDomain("TUT", [course("b4", "B", "TUT", "MON", "10:00am - 11:00am")]),
            ],
        )

    def test_impact_counts_same_day_overlaps(self) -> None:
        c = course("a1", "A", "LEC", "MON", "9:00am - 10:00am")
        # b1 and b2 overlap, b3 is another day, b4 only touches
        self.assertEqual(calculate_impact(c, [self.other]), 2)

    def test_order_least_constraining_first(self) -> None:
        a1 = course("a1", "A", "LEC", "MON", "9:00am - 11:00am")  # b1, b2, b4
        a2 = course("a2", "A", "LEC", "WED", "9:00am - 11:00am")  # nothing
        a3 = course("a3", "A", "LEC", "TUE", "9:30am - 10:30am")  # b3
        given = [a1, a2, a3]
        ordered = order_by_lcv(given, [self.other])
        self.assertEqual([c.id for c in ordered], ["a2", "a3", "a1"])
        self.assertEqual([c.id for c in given], ["a1", "a2", "a3"])

    def test_ties_keep_input_order(self) -> None:
        a1 = course("a1", "A", "LEC", "FRI", "9:00am - 10:00am")
        a2 = course("a2", "A", "LEC", "THU", "9:00am - 10:00am")
        self.assertEqual([c.id for c in order_by_lcv([a1, a2], [self.other])], ["a1", "a2"])


if __name__ == "__main__":
    unittest.main()
