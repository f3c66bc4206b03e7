"""
Excel extractor for normalized punch sheets.

One row per employee/day (several rows for the same employee/day are merged).
Expected columns (case-insensitive, any of the aliases):
  employee_id / emp_id / employee code / id
  name / employee_name / full_name / employee
  department / dept
  day / date / day_number
  punches / punch_times / times
Optional:
  is_weekend / weekend, is_holiday / holiday, status (WO = weekend, H = holiday)
  numbered punch columns: in_time1, out_time1, in_time2, out_time2, punch_1 ...

Weekend and holiday flags fall back to the report calendar when no column
supplies them.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import IO, Optional

import pandas as pd
from pydantic import ValidationError

from punchclock import report_calendar
from punchclock.core.config import AttendanceConfig
from punchclock.schemas.attendance import EmployeeRecord, PunchSet
from punchclock.services.time_utils import extract_times

logger = logging.getLogger(__name__)

COLUMN_ALIASES: dict[str, list[str]] = {
    "employee_id": [
        "employee_id", "emp_id", "employee id", "employee code", "emp code", "code", "id",
    ],
    "name": ["name", "employee_name", "employee name", "full_name", "employee"],
    "department": ["department", "dept", "department name"],
    "day": ["day", "date", "day_number", "day number"],
    "punches": ["punches", "punch_times", "punch times", "times", "punch"],
    "is_weekend": ["is_weekend", "weekend"],
    "is_holiday": ["is_holiday", "holiday"],
    "status": ["status"],
}

REQUIRED_COLUMNS = ("employee_id", "name", "day")

_NUMBERED_PUNCH_RE = re.compile(r"^(in|out)[ _]?time[ _]?\d$|^punch[ _]?\d$")

_TRUE_VALUES: frozenset[str] = frozenset({"1", "true", "yes", "y", "x"})

_WEEKEND_STATUS: frozenset[str] = frozenset({"wo", "weekend", "weekly off"})
_HOLIDAY_STATUS: frozenset[str] = frozenset({"h", "holiday", "ph"})


@dataclass
class _DayAccumulator:
    punches: list[str] = field(default_factory=list)
    is_weekend: Optional[bool] = None
    is_holiday: Optional[bool] = None


@dataclass
class _EmployeeAccumulator:
    employee_id: str
    name: str
    department: str
    days: dict[int, _DayAccumulator] = field(default_factory=dict)


def _normalize_columns(df: pd.DataFrame) -> tuple[pd.DataFrame, list[str]]:
    """Rename columns to canonical names; return the frame and any numbered punch columns."""
    lower_cols = {str(c).lower().strip(): c for c in df.columns}
    rename_map: dict[str, str] = {}
    for canonical, aliases in COLUMN_ALIASES.items():
        for alias in aliases:
            if alias in lower_cols and lower_cols[alias] not in rename_map:
                rename_map[lower_cols[alias]] = canonical
                break
    numbered = [
        original for lowered, original in lower_cols.items()
        if _NUMBERED_PUNCH_RE.match(lowered) and original not in rename_map
    ]
    return df.rename(columns=rename_map), [str(c) for c in numbered]


def _clean_cell(value: object) -> str:
    """Normalize pandas NaN placeholders to empty string."""
    text = str(value if value is not None else "").strip()
    return "" if text.lower() in ("nan", "none", "nat") else text


def _parse_flag(value: str) -> Optional[bool]:
    if not value:
        return None
    return value.lower() in _TRUE_VALUES


def _parse_day(value: str) -> int:
    """Day of month from an integer-like cell or a full date."""
    try:
        number = float(value)
    except ValueError:
        parsed = pd.to_datetime(value, dayfirst=True)
        if pd.isna(parsed):
            raise ValueError("empty or unparseable date")
        return int(parsed.day)
    if not number.is_integer():
        raise ValueError(f"day {value!r} is not a whole number")
    return int(number)


def parse_excel(
    file: IO[bytes],
    config: AttendanceConfig,
) -> tuple[list[EmployeeRecord], list[str]]:
    """
    Parse an Excel file and return (employee_records, error_messages).

    Rows that cannot be used are skipped and reported; they never abort the parse.
    """
    try:
        df = pd.read_excel(file, engine="openpyxl", dtype=str, header=0)
    except Exception as exc:
        return [], [f"Could not open workbook: {exc}"]

    df, numbered_punch_cols = _normalize_columns(df)
    raw_cols = {str(c): c for c in df.columns}

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if "punches" not in df.columns and not numbered_punch_cols:
        missing.append("punches")
    if missing:
        return [], [f"Missing required columns: {', '.join(missing)}"]

    employees: dict[str, _EmployeeAccumulator] = {}
    errors: list[str] = []
    skipped_empty = 0

    # Header is the first sheet row; data rows start at 2 (1-indexed).
    for i, row in enumerate(df.to_dict(orient="records"), start=2):
        employee_id = _clean_cell(row.get("employee_id"))
        name = _clean_cell(row.get("name"))
        raw_day = _clean_cell(row.get("day"))

        cells = [_clean_cell(row.get("punches"))] + [
            _clean_cell(row.get(raw_cols[c])) for c in numbered_punch_cols
        ]

        if not employee_id and not name and not raw_day and not any(cells):
            skipped_empty += 1
            continue

        if not employee_id:
            msg = f"Row {i}: employee id is empty"
            logger.warning("Skipped - %s (name='%s')", msg, name)
            errors.append(msg)
            continue

        try:
            day = _parse_day(raw_day)
        except Exception:
            msg = f"Row {i}: invalid day '{raw_day}'"
            logger.warning("Skipped - %s (employee='%s')", msg, employee_id)
            errors.append(msg)
            continue

        employee = employees.get(employee_id)
        if employee is None:
            employee = _EmployeeAccumulator(
                employee_id=employee_id,
                name=name,
                department=_clean_cell(row.get("department")) or config.department,
            )
            employees[employee_id] = employee
        elif not employee.name and name:
            employee.name = name

        acc = employee.days.setdefault(day, _DayAccumulator())
        for cell in cells:
            acc.punches.extend(extract_times(cell))

        status = _clean_cell(row.get("status")).lower()
        weekend_flag = _parse_flag(_clean_cell(row.get("is_weekend")))
        holiday_flag = _parse_flag(_clean_cell(row.get("is_holiday")))
        if status in _WEEKEND_STATUS:
            weekend_flag = True
        elif status in _HOLIDAY_STATUS:
            holiday_flag = True
        if weekend_flag is not None:
            acc.is_weekend = bool(acc.is_weekend) or weekend_flag
        if holiday_flag is not None:
            acc.is_holiday = bool(acc.is_holiday) or holiday_flag

    records: list[EmployeeRecord] = []
    for employee in employees.values():
        days = []
        for day, acc in sorted(employee.days.items()):
            days.append(PunchSet(
                day=day,
                is_weekend=(
                    acc.is_weekend if acc.is_weekend is not None
                    else report_calendar.is_weekend(config, day)
                ),
                is_holiday=(
                    acc.is_holiday if acc.is_holiday is not None
                    else report_calendar.is_holiday(config, day)
                ),
                punch_times=acc.punches,
            ))
        try:
            records.append(EmployeeRecord(
                id=employee.employee_id,
                name=employee.name,
                department=employee.department,
                days=days,
            ))
        except ValidationError as exc:
            for err in exc.errors():
                msg = f"Employee {employee.employee_id}: {err['loc'][0]} - {err['msg']}"
                logger.warning("Skipped - %s", msg)
                errors.append(msg)

    logger.info(
        "Parsing finished: employees=%d, errors=%d, empty_rows=%d",
        len(records), len(errors), skipped_empty,
    )
    return records, errors
