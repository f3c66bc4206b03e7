"""
Day classification: one PunchSet in, one ClassifiedDay out.

Status is decided in this order: weekend, holiday, no usable punch (absent),
otherwise present. Only the earliest and latest punch matter; the timing
category of the earliest punch decides how many hours make a full day.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from punchclock import report_calendar
from punchclock.core.config import AttendanceConfig
from punchclock.core.enums import DayStatus, TimingCategory
from punchclock.schemas.attendance import ClassifiedDay, Employee, EmployeeRecord, PunchSet
from punchclock.services import time_utils

logger = logging.getLogger(__name__)


def _usable_punches(raw: Iterable[str], day: int) -> list[str]:
    """Canonical, de-duplicated punches in ascending order. Malformed entries are dropped."""
    punches: set[str] = set()
    for value in raw:
        normalized = time_utils.normalize_time(value)
        if normalized is None:
            if value and value.strip():
                logger.debug("Day %d: unparseable punch '%s' ignored", day, value)
            continue
        punches.add(normalized)
    return sorted(punches, key=time_utils.parse_time)


def timing_category(first_punch: str, config: AttendanceConfig) -> TimingCategory:
    if not time_utils.is_valid_time(first_punch):
        return TimingCategory.UNUSUAL
    minutes = time_utils.parse_time(first_punch)
    start = time_utils.parse_time(config.regular_start)
    end = time_utils.parse_time(config.regular_end)
    if start <= minutes <= end:
        return TimingCategory.REGULAR
    return TimingCategory.UNUSUAL


def required_hours(category: TimingCategory, config: AttendanceConfig) -> float:
    if category is TimingCategory.REGULAR:
        return config.regular_required_hours
    return config.unusual_required_hours


def classify(punch_set: PunchSet, config: AttendanceConfig) -> ClassifiedDay:
    day = punch_set.day
    day_of_week = report_calendar.weekday_name(config, day)

    if punch_set.is_weekend:
        return ClassifiedDay(day=day, day_of_week=day_of_week, status=DayStatus.WEEKEND_OFF)

    if punch_set.is_holiday:
        return ClassifiedDay(day=day, day_of_week=day_of_week, status=DayStatus.HOLIDAY)

    punches = _usable_punches(punch_set.punch_times, day)
    if not punches:
        return ClassifiedDay(day=day, day_of_week=day_of_week, status=DayStatus.ABSENT)

    first_punch, last_punch = punches[0], punches[-1]
    category = timing_category(first_punch, config)
    required = required_hours(category, config)
    worked = time_utils.duration_hours(first_punch, last_punch)

    late = time_utils.late_minutes(first_punch, config.check_in_time)
    early = time_utils.early_minutes(last_punch, config.check_out_time)

    return ClassifiedDay(
        day=day,
        day_of_week=day_of_week,
        status=DayStatus.PRESENT,
        timing_category=category,
        first_punch=first_punch,
        last_punch=last_punch,
        punch_count=len(punches),
        work_duration_hours=worked,
        required_hours=required,
        is_full_day=worked >= required,
        late_minutes=late,
        is_late=time_utils.is_after(first_punch, config.check_in_time),
        early_departure_minutes=early,
        is_early_departure=time_utils.is_before(last_punch, config.check_out_time),
    )


def classify_employee(record: EmployeeRecord, config: AttendanceConfig) -> Employee:
    """Classify every day of an employee record and order the result by day number."""
    days = tuple(
        classify(punch_set, config)
        for punch_set in sorted(record.days, key=lambda p: p.day)
    )
    return Employee(
        id=record.id,
        name=record.name,
        department=record.department or config.department,
        days=days,
    )
