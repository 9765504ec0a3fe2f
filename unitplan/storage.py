"""
JSON storage for course lists and schedules.

Files used by the CLI:

    <data dir>/courses.json     a CourseList (unit code -> unitName + courses)
    <data dir>/schedule.json    the last generated schedule (or null)

Course lists are validated on load, so nothing malformed ever reaches the
solver from disk.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from unitplan.exceptions import InputValidationError
from unitplan.model import UnitData, load_course_list

logger = logging.getLogger(__name__)


def default_data_dir() -> Path:
    """
    Directory the CLI reads from and writes to when no path is given:
    ./data below the working directory at call time.
    """
    return Path.cwd() / "data"


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InputValidationError(f"{path} is not valid JSON: {exc}") from exc


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


def load_course_list_file(path: str | Path) -> dict[str, UnitData]:
    """
    Load and validate a CourseList JSON file.

    Raises FileNotFoundError if the file is missing and
    InputValidationError if its content is malformed.
    """
    p = Path(path)
    data = _read_json(p)
    course_list = load_course_list(data)
    logger.info("Loaded %d units from %s", len(course_list), p)
    return course_list


def course_list_to_dict(course_list: Mapping[str, UnitData]) -> dict[str, Any]:
    return {
        code: {"unitName": unit.unit_name, "courses": [c.to_dict() for c in unit.courses]}
        for code, unit in course_list.items()
    }


def save_course_list_file(course_list: Mapping[str, UnitData], path: str | Path) -> None:
    _write_json(Path(path), course_list_to_dict(course_list))


def save_schedule(schedule: Mapping[str, Any] | None, path: str | Path) -> None:
    """
    Save a schedule in wire format. An infeasible result is stored as null.
    """
    _write_json(Path(path), None if schedule is None else dict(schedule))


def load_schedule(path: str | Path) -> dict[str, UnitData] | None:
    """
    Load a saved schedule. Its shape is a CourseList, so it is validated the
    same way; null means "no schedule".
    """
    data = _read_json(Path(path))
    if data is None:
        return None
    return load_course_list(data)


def merge_course_lists(*course_lists: Mapping[str, UnitData]) -> dict[str, UnitData]:
    """
    Combine several course lists; a later entry for the same unit replaces
    an earlier one.
    """
    out: dict[str, UnitData] = {}
    for cl in course_lists:
        out.update(cl)
    return out
