"""
Unit tests for course list validation (wire format -> dataclasses).
"""

import unittest

from unitplan.exceptions import InputValidationError, InvalidCourseError, TimeParseError, UnknownDayError
from unitplan.model import Course, UnitData, load_course_list, schedule_to_dict


def raw_course(**overrides):
    c = {
        "id": "c1",
        "unitCode": "IFB104",
        "unitName": "IFB104 Building IT Systems",
        "classType": "Lecture (Week 1-13)",
        "activity": "LEC",
        "day": "MON",
        "time": "02:00pm - 04:00pm",
        "room": "GP Z411",
        "teachingStaff": "Laurianne Sitbon",
    }
    c.update(overrides)
    return c


class TestCourseFromDict(unittest.TestCase):
    def test_wire_fields(self) -> None:
        c = Course.from_dict(raw_course())
        self.assertEqual(c.unit_code, "IFB104")
        self.assertEqual(c.class_type, "Lecture (Week 1-13)")
        self.assertEqual(c.teaching_staff, "Laurianne Sitbon")
        self.assertEqual(c.interval.start, 840)
        self.assertEqual(c.to_dict(), raw_course())

    def test_day_and_activity_normalized(self) -> None:
        c = Course.from_dict(raw_course(day="tue", activity=" tut "))
        self.assertEqual(c.day, "TUE")
        self.assertEqual(c.activity, "TUT")

    def test_unknown_day(self) -> None:
        with self.assertRaises(UnknownDayError):
            Course.from_dict(raw_course(day="MONDAY"))

    def test_bad_time_carries_context(self) -> None:
        with self.assertRaises(TimeParseError) as ctx:
            Course.from_dict(raw_course(time="9 o'clock"), index=3)
        self.assertEqual(ctx.exception.unit_code, "IFB104")
        self.assertEqual(ctx.exception.index, 3)
        self.assertIn("IFB104", str(ctx.exception))

    def test_missing_activity(self) -> None:
        with self.assertRaises(InvalidCourseError):
            Course.from_dict(raw_course(activity=""))

    def test_missing_id_is_generated(self) -> None:
        data = raw_course()
        del data["id"]
        c = Course.from_dict(data, index=2)
        self.assertEqual(c.id, "IFB104-LEC-2")


class TestLoadCourseList(unittest.TestCase):
    def test_units_and_declared_activities(self) -> None:
        raw = {
            "IFB104": {
                "unitName": "Building IT Systems",
                "courses": [
                    raw_course(id="a", activity="TUT"),
                    raw_course(id="b", activity="LEC"),
                    raw_course(id="c", activity="TUT"),
                ],
            }
        }
        units = load_course_list(raw)
        unit = units["IFB104"]
        self.assertIsInstance(unit, UnitData)
        self.assertEqual([c.id for c in unit.courses], ["a", "b", "c"])
        self.assertEqual(unit.activities, ("TUT", "LEC"))

    def test_unit_code_filled_from_key(self) -> None:
        data = raw_course()
        del data["unitCode"]
        units = load_course_list({"IFB104": {"unitName": "X", "courses": [data]}})
        self.assertEqual(units["IFB104"].courses[0].unit_code, "IFB104")

    def test_empty_unit_is_accepted(self) -> None:
        units = load_course_list({"IFB104": {"unitName": "X", "courses": []}})
        self.assertEqual(units["IFB104"].courses, ())
        self.assertEqual(units["IFB104"].activities, ())

    def test_not_a_mapping(self) -> None:
        with self.assertRaises(InputValidationError):
            load_course_list([raw_course()])

    def test_courses_not_a_list(self) -> None:
        with self.assertRaises(InvalidCourseError):
            load_course_list({"IFB104": {"unitName": "X", "courses": "nope"}})

    def test_course_of_other_unit_rejected(self) -> None:
        with self.assertRaises(InvalidCourseError):
            load_course_list({"IFB105": {"unitName": "X", "courses": [raw_course()]}})

    def test_unit_codes_differing_only_by_whitespace_collide(self) -> None:
        raw = {
            "IFB104": {"unitName": "X", "courses": [raw_course(id="a", activity="LEC")]},
            "IFB104 ": {"unitName": "X", "courses": [raw_course(id="b", activity="TUT")]},
        }
        with self.assertRaises(InvalidCourseError) as ctx:
            load_course_list(raw)
        self.assertIn("duplicate unit code", str(ctx.exception))

    def test_unit_data_under_wrong_key_rejected(self) -> None:
        unit = load_course_list({"IFB104": {"unitName": "X", "courses": [raw_course()]}})["IFB104"]
        with self.assertRaises(InvalidCourseError):
            load_course_list({"IFB105": unit})

    def test_unit_data_passes_through(self) -> None:
        unit = load_course_list({"IFB104": {"unitName": "X", "courses": [raw_course()]}})["IFB104"]
        self.assertIs(load_course_list({"IFB104": unit})["IFB104"], unit)


class TestScheduleToDict(unittest.TestCase):
    def test_none_stays_none(self) -> None:
        self.assertIsNone(schedule_to_dict(None))

    def test_courses_become_wire_dicts(self) -> None:
        c = Course.from_dict(raw_course())
        out = schedule_to_dict({"IFB104": {"unitName": "X", "courses": [c]}})
        self.assertEqual(out, {"IFB104": {"unitName": "X", "courses": [raw_course()]}})


if __name__ == "__main__":
    unittest.main()
