"""
CLI (Command Line Interface).

    unitplan schedule <courses.json> [--earliest 9:00am] [--latest 5:00pm]
                      [--days MON,TUE] [--availability avail.json]
                      [--lock COURSE_ID ...] [--max-nodes N] [--out schedule.json]
    unitplan check <schedule.json>
    unitplan fetch <UNIT> [<UNIT> ...] --period <id> --url <base> --out <courses.json>

Exit codes:
    0  success
    1  no conflict-free schedule / conflicts found / fetch failed
    2  malformed input
    3  search aborted by --max-nodes
    4  output file could not be written
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Callable

import requests
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from unitplan.conflicts import find_conflicts
from unitplan.exceptions import InputValidationError, SearchBudgetExceeded
from unitplan.fetch import fetch_units
from unitplan.model import DAY_CODES, Course, FinalSchedule, schedule_to_dict
from unitplan.preferences import Preferences, apply_preferences
from unitplan.solver import Scheduler
from unitplan.storage import (
    default_data_dir,
    load_course_list_file,
    load_schedule,
    save_course_list_file,
    save_schedule,
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _sort_key(course: Course) -> tuple[int, int, str]:
    return (DAY_CODES.index(course.day), course.interval.start, course.unit_code)


def _timetable(courses: list[Course], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Day")
    table.add_column("Time")
    table.add_column("Unit")
    table.add_column("Activity")
    table.add_column("Room")
    table.add_column("Staff")
    for c in sorted(courses, key=_sort_key):
        table.add_row(c.day, c.time, c.unit_code, c.activity, c.room, c.teaching_staff)
    return table


def _flatten(schedule: FinalSchedule) -> list[Course]:
    out: list[Course] = []
    for entry in schedule.values():
        out.extend(entry["courses"])
    return out


def _load_study_times(path: str | None) -> dict[str, list[str]] | None:
    if not path:
        return None
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InputValidationError(f"cannot read availability file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise InputValidationError("availability file must map day codes to slot lists")
    return {str(k): [str(s) for s in v] for k, v in data.items()}


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return value


def _save(save_fn: Callable[[Any, str | Path], None], payload: Any, path: str | Path) -> bool:
    try:
        save_fn(payload, path)
    except OSError as exc:
        console.print(f"[red]Cannot write {path}:[/red] {exc.strerror or exc}")
        return False
    return True


def _cmd_schedule(args: argparse.Namespace) -> int:
    """
    Load a course list, apply preferences and search for a timetable.
    """
    try:
        course_list = load_course_list_file(args.file)
        prefs = Preferences(
            earliest=args.earliest,
            latest=args.latest,
            days=[d for d in (args.days or "").split(",") if d.strip()],
            study_times=_load_study_times(args.availability),
            locked_ids=list(args.lock or []),
        )
        course_list = apply_preferences(course_list, prefs)
    except FileNotFoundError:
        console.print(f"Course list not found: {args.file}")
        return 2
    except InputValidationError as exc:
        console.print(f"[red]Invalid input:[/red] {exc}")
        return 2

    scheduler = Scheduler(node_limit=args.max_nodes)
    try:
        result = scheduler.run(course_list)
    except SearchBudgetExceeded as exc:
        console.print(f"[yellow]{exc}[/yellow]")
        return 3

    out_path = args.out
    if result is None:
        console.print("No conflict-free schedule found.")
        if out_path and not _save(save_schedule, None, out_path):
            return 4
        return 1

    wire = schedule_to_dict(result)
    if args.json:
        console.print_json(json.dumps(wire, ensure_ascii=False))
    else:
        console.print(_timetable(_flatten(result), f"Schedule ({len(result)} units)"))
        console.print(f"Searched {scheduler.stats.nodes} options, {scheduler.stats.backtracks} backtracks.")

    if out_path:
        if not _save(save_schedule, wire, out_path):
            return 4
        console.print(f"Saved schedule to: {out_path}")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """
    Print all overlapping courses in a saved schedule.
    """
    try:
        schedule = load_schedule(args.file)
    except FileNotFoundError:
        console.print(f"Schedule not found: {args.file}")
        return 2
    except InputValidationError as exc:
        console.print(f"[red]Invalid input:[/red] {exc}")
        return 2

    if schedule is None:
        console.print("Schedule file holds no schedule.")
        return 1

    courses = [c for unit in schedule.values() for c in unit.courses]
    confs = find_conflicts(courses)
    if not confs:
        console.print("No conflicts found.")
        return 0

    console.print(f"Conflicts found: {len(confs)}")
    for a, b in confs:
        console.print(f"- {a.day} {a.time} {a.unit_code} {a.activity}  <->  {b.time} {b.unit_code} {b.activity}")
    return 1


def _cmd_fetch(args: argparse.Namespace) -> int:
    """
    Download unit course data from the course-data service.
    """
    out_path = Path(args.out) if args.out else default_data_dir() / "courses.json"
    try:
        course_list = fetch_units(args.units, args.period, args.url, timeout=args.timeout)
    except requests.RequestException as exc:
        console.print(f"[red]Fetch failed:[/red] {exc}")
        return 1
    except InputValidationError as exc:
        console.print(f"[red]Invalid data from service:[/red] {exc}")
        return 2

    if not _save(save_course_list_file, course_list, out_path):
        return 4
    total = sum(len(u.courses) for u in course_list.values())
    console.print(f"Saved {len(course_list)} units ({total} classes) to: {out_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="unitplan", description="Conflict-free unit timetable generator")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show search progress logs")
    sub = parser.add_subparsers(dest="command", required=True)

    p_schedule = sub.add_parser("schedule", help="Generate a timetable from a course list")
    p_schedule.add_argument("file", type=str, help="Course list JSON file")
    p_schedule.add_argument("--earliest", type=str, help="Earliest start time (e.g. 9:00am)")
    p_schedule.add_argument("--latest", type=str, help="Latest end time (e.g. 5:00pm)")
    p_schedule.add_argument("--days", type=str, help="Comma separated days to attend (e.g. MON,TUE,THU)")
    p_schedule.add_argument("--availability", type=str, help="JSON file of available 30-minute slots per day")
    p_schedule.add_argument("--lock", action="append", metavar="COURSE_ID", help="Force this class (repeatable)")
    p_schedule.add_argument("--max-nodes", type=_positive_int, default=None, help="Abort search after N tried options")
    p_schedule.add_argument("--out", type=str, help="Write the schedule JSON here")
    p_schedule.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    p_check = sub.add_parser("check", help="Check a saved schedule for clashes")
    p_check.add_argument("file", type=str, help="Schedule JSON file")

    p_fetch = sub.add_parser("fetch", help="Download course data for units")
    p_fetch.add_argument("units", nargs="+", help="Unit codes (e.g. IFB104)")
    p_fetch.add_argument("--period", "-p", type=str, required=True, help="Teaching period id")
    p_fetch.add_argument("--url", type=str, required=True, help="Base URL of the course-data service")
    p_fetch.add_argument("--out", type=str, help="Output course list JSON (default: data/courses.json)")
    p_fetch.add_argument("--timeout", type=float, default=30, help="HTTP timeout in seconds")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "schedule":
        raise SystemExit(_cmd_schedule(args))
    if args.command == "check":
        raise SystemExit(_cmd_check(args))
    if args.command == "fetch":
        raise SystemExit(_cmd_fetch(args))

    raise SystemExit(2)
