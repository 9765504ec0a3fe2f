"""
Central data model definitions used across the project.

This module defines the canonical structure of courses, units and
search domains so that:
- all modules share the same field names
- raw JSON (camelCase wire format) is validated in exactly one place
- the solver only ever sees well-formed data

Wire format (one entry of a CourseList):

    {
      "IFB104": {
        "unitName": "IFB104 Building IT Systems",
        "courses": [
          {"id": "...", "unitCode": "IFB104", "unitName": "...",
           "classType": "Lecture (Week 1-13)", "activity": "LEC",
           "day": "MON", "time": "02:00pm - 04:00pm",
           "room": "GP Z411", "teachingStaff": "..."}
        ]
      }
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from unitplan.exceptions import InputValidationError, InvalidCourseError, TimeParseError, UnknownDayError
from unitplan.timeparse import TimeInterval, parse_interval


DAY_CODES: tuple[str, ...] = ("MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN")


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value).strip()


@dataclass(frozen=True)
class Course:
    """
    One concrete session of a unit (a single timeslot option).
    """

    id: str
    unit_code: str
    unit_name: str
    class_type: str
    activity: str
    day: str
    time: str
    room: str
    teaching_staff: str

    @property
    def interval(self) -> TimeInterval:
        return parse_interval(self.time)

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        unit_code: str | None = None,
        unit_name: str | None = None,
        index: int | None = None,
    ) -> Course:
        """
        Build a Course from its wire form and validate it.

        unit_code / unit_name are used when the course entry omits them.
        """
        if not isinstance(data, Mapping):
            raise InvalidCourseError("course entry must be an object", unit_code, index)

        code = _text(data, "unitCode") or (unit_code or "")
        name = _text(data, "unitName") or (unit_name or "")
        activity = _text(data, "activity").upper()
        day = _text(data, "day").upper()
        time = _text(data, "time")

        if not code:
            raise InvalidCourseError("missing unitCode", unit_code, index)
        if not activity:
            raise InvalidCourseError("missing activity", code, index)
        if day not in DAY_CODES:
            raise UnknownDayError(f"unknown day {data.get('day')!r}", code, index)
        try:
            parse_interval(time)
        except TimeParseError as exc:
            raise TimeParseError(f"unparseable time {time!r}", code, index) from exc

        course_id = _text(data, "id") or f"{code}-{activity}-{index if index is not None else 0}"

        return cls(
            id=course_id,
            unit_code=code,
            unit_name=name,
            class_type=_text(data, "classType"),
            activity=activity,
            day=day,
            time=time,
            room=_text(data, "room"),
            teaching_staff=_text(data, "teachingStaff"),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "unitCode": self.unit_code,
            "unitName": self.unit_name,
            "classType": self.class_type,
            "activity": self.activity,
            "day": self.day,
            "time": self.time,
            "room": self.room,
            "teachingStaff": self.teaching_staff,
        }


@dataclass(frozen=True)
class UnitData:
    """
    One unit as supplied by the caller: its name and all course options.

    `activities` lists the activity codes the unit requires, in order of
    first appearance. It is derived from the courses when not given and is
    kept by the preference filters, so an activity whose options were all
    filtered away is still known to be required.
    """

    unit_code: str
    unit_name: str
    courses: tuple[Course, ...]
    activities: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.activities:
            derived = tuple(dict.fromkeys(c.activity for c in self.courses))
            object.__setattr__(self, "activities", derived)


@dataclass
class ActivityDomain:
    """
    Remaining course options for one activity (e.g. all LEC slots of a unit).
    """

    activity: str
    courses: list[Course]


@dataclass
class UnitDomain:
    unit_code: str
    unit_name: str
    activities: list[ActivityDomain] = field(default_factory=list)

    @property
    def domain_size(self) -> int:
        return sum(len(a.courses) for a in self.activities)


@dataclass(frozen=True)
class ScheduledTime:
    """
    A committed, occupied slot on one day.
    """

    day: str
    interval: TimeInterval
    unit_code: str
    activity: str


# unitCode -> {"unitName": str, "courses": list[Course]}
FinalSchedule = dict[str, dict[str, Any]]


def load_course_list(raw: Mapping[str, Any]) -> dict[str, UnitData]:
    """
    Validate a raw CourseList mapping and convert it to UnitData values.

    Raises InputValidationError (or a subclass) on the first malformed entry.
    A unit with an empty course list is accepted: that is an infeasible
    request, not a malformed one.
    """
    if not isinstance(raw, Mapping):
        raise InputValidationError("course list must be an object keyed by unit code")

    out: dict[str, UnitData] = {}
    for unit_code, unit in raw.items():
        code = str(unit_code).strip()
        if not code:
            raise InvalidCourseError("empty unit code")
        if code in out:
            raise InvalidCourseError("duplicate unit code", code)
        if isinstance(unit, UnitData):
            if unit.unit_code != code:
                raise InvalidCourseError(f"unit stored under {code!r} is {unit.unit_code!r}", code)
            out[code] = unit
            continue
        if not isinstance(unit, Mapping):
            raise InvalidCourseError("unit entry must be an object", code)

        unit_name = _text(unit, "unitName")
        courses_raw = unit.get("courses", [])
        if not isinstance(courses_raw, list):
            raise InvalidCourseError("'courses' must be a list", code)

        courses: list[Course] = []
        for i, c in enumerate(courses_raw):
            if isinstance(c, Course):
                courses.append(c)
            else:
                courses.append(Course.from_dict(c, unit_code=code, unit_name=unit_name, index=i))

        mismatched = [c for c in courses if c.unit_code != code]
        if mismatched:
            raise InvalidCourseError(f"course {mismatched[0].id!r} belongs to {mismatched[0].unit_code!r}", code)

        out[code] = UnitData(unit_code=code, unit_name=unit_name, courses=tuple(courses))

    return out


def schedule_to_dict(schedule: FinalSchedule | None) -> dict[str, Any] | None:
    """
    Convert a FinalSchedule into its wire form (courses as camelCase dicts).
    """
    if schedule is None:
        return None
    return {
        code: {"unitName": entry["unitName"], "courses": [c.to_dict() for c in entry["courses"]]}
        for code, entry in schedule.items()
    }
