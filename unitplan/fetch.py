"""
Client for the course-data service.

The service answers

    GET <base_url>/api/course-data?unitCode=IFB104&teachingPeriod=<id>

with a one-unit CourseList:

    {"IFB104": {"unitName": "...", "courses": [...]}}

Only JSON is consumed here; turning the university's timetable pages into
that JSON is the service's job.
"""

from __future__ import annotations

import logging
import time
from typing import Iterable

import requests

from unitplan.exceptions import InputValidationError
from unitplan.model import UnitData, load_course_list

logger = logging.getLogger(__name__)

COURSE_DATA_PATH = "/api/course-data"


def fetch_unit(
    unit_code: str,
    teaching_period: str,
    base_url: str,
    session: requests.Session | None = None,
    timeout: float = 30,
) -> UnitData:
    """
    Fetch and validate the course options of one unit.
    """
    code = unit_code.strip().upper()
    if not code:
        raise InputValidationError("empty unit code")

    get = session.get if session is not None else requests.get
    url = base_url.rstrip("/") + COURSE_DATA_PATH
    params = {"unitCode": code, "teachingPeriod": teaching_period}

    logger.info("FETCH %s (%s)", code, teaching_period)
    resp = get(url, params=params, timeout=timeout)
    resp.raise_for_status()

    try:
        payload = resp.json()
    except ValueError as exc:
        raise InputValidationError(f"course-data response is not JSON: {exc}", code) from exc

    if not isinstance(payload, dict) or code not in payload:
        raise InputValidationError("course-data response does not contain the unit", code)

    return load_course_list({code: payload[code]})[code]


def fetch_units(
    unit_codes: Iterable[str],
    teaching_period: str,
    base_url: str,
    session: requests.Session | None = None,
    timeout: float = 30,
    sleep_seconds: float = 0.2,
) -> dict[str, UnitData]:
    """
    Fetch several units with one HTTP session, in the given order.
    Without a session, one is opened and closed around the whole batch.
    """
    if session is None:
        with requests.Session() as http:
            return fetch_units(unit_codes, teaching_period, base_url, http, timeout, sleep_seconds)

    out: dict[str, UnitData] = {}
    for i, code in enumerate(unit_codes):
        if i and sleep_seconds:
            time.sleep(sleep_seconds)
        unit = fetch_unit(code, teaching_period, base_url, session=session, timeout=timeout)
        out[unit.unit_code] = unit
    return out
