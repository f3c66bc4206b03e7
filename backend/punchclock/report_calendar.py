"""
Calendar helpers for the configured report month.

The punch-clock export covers one month of one department, so every lookup is
keyed by day number and resolved against ``AttendanceConfig.report_year`` /
``report_month``. Holidays are not fetched from anywhere: the department
lists them in configuration.
"""

from __future__ import annotations

from calendar import day_name, monthrange
from datetime import date
from typing import Optional

from punchclock.core.config import AttendanceConfig

# Saturday, Sunday
_WEEKEND_WEEKDAYS: frozenset[int] = frozenset({5, 6})


def days_in_month(year: int, month: int) -> int:
    _, last = monthrange(year, month)
    return last


def _to_date(config: AttendanceConfig, day: int) -> Optional[date]:
    if not 1 <= day <= days_in_month(config.report_year, config.report_month):
        return None
    return date(config.report_year, config.report_month, day)


def is_weekend(config: AttendanceConfig, day: int) -> bool:
    """Saturday or Sunday in the report month. Days outside the month are not weekends."""
    d = _to_date(config, day)
    return d is not None and d.weekday() in _WEEKEND_WEEKDAYS


def is_holiday(config: AttendanceConfig, day: int) -> bool:
    return day in config.holidays


def weekday_name(config: AttendanceConfig, day: int) -> Optional[str]:
    d = _to_date(config, day)
    return day_name[d.weekday()] if d is not None else None

