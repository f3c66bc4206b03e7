"""
Per-day rule checks that turn a ClassifiedDay into zero or more Issue records.

A day with a single punch has only one identifiable end of the shift: a
punch before the middle of the shift is read as the arrival, anything later
as the departure. Late arrival is not judged on a day whose arrival is
missing, and early departure is not judged on a day whose departure is
missing.
"""

from __future__ import annotations

from collections.abc import Iterable

from punchclock.core.config import AttendanceConfig
from punchclock.core.enums import DayStatus, IssueType, Severity
from punchclock.schemas.attendance import ClassifiedDay
from punchclock.schemas.report import Issue
from punchclock.services import time_utils
from punchclock.services.analyzers.half_day import MAJOR_SHORTAGE, shortage_hours, shortage_reason


def _label(day: ClassifiedDay) -> str:
    if day.day_of_week:
        return f"day {day.day} ({day.day_of_week})"
    return f"day {day.day}"


def shift_midpoint(config: AttendanceConfig) -> int:
    check_in = time_utils.parse_time(config.check_in_time)
    check_out = time_utils.parse_time(config.check_out_time)
    return (check_in + check_out) // 2


def _magnitude_severity(minutes: int, config: AttendanceConfig) -> Severity:
    return Severity.HIGH if minutes > config.severity_threshold_minutes else Severity.MEDIUM


def identifiable_ends(day: ClassifiedDay, config: AttendanceConfig) -> tuple[bool, bool]:
    """(has_arrival, has_departure) for a present day."""
    if day.punch_count == 0:
        return False, False
    if day.punch_count > 1:
        return True, True
    if time_utils.parse_time(day.first_punch) < shift_midpoint(config):
        return True, False
    return False, True


def extract_issues(day: ClassifiedDay, config: AttendanceConfig) -> list[Issue]:
    if day.status in (DayStatus.WEEKEND_OFF, DayStatus.HOLIDAY):
        return []

    label = _label(day)
    if day.status is DayStatus.ABSENT:
        return [Issue(
            type=IssueType.ABSENT,
            message=f"Absent on {label}",
            severity=Severity.HIGH,
            day=day.day,
        )]

    issues: list[Issue] = []
    has_arrival, has_departure = identifiable_ends(day, config)

    if not has_arrival:
        issues.append(Issue(
            type=IssueType.MISSING_PUNCH_IN,
            message=f"Missing punch in on {label} (only punch at {day.last_punch})",
            severity=Severity.HIGH,
            day=day.day,
        ))
    elif day.is_late:
        issues.append(Issue(
            type=IssueType.LATE_ARRIVAL,
            message=(
                f"Late arrival by {day.late_minutes} minutes on {label} - "
                f"arrived at {day.first_punch}, expected by {config.check_in_time}"
            ),
            severity=_magnitude_severity(day.late_minutes, config),
            day=day.day,
        ))

    if not has_departure:
        issues.append(Issue(
            type=IssueType.MISSING_PUNCH_OUT,
            message=f"Missing punch out on {label} (only punch at {day.first_punch})",
            severity=Severity.HIGH,
            day=day.day,
        ))
    elif day.is_early_departure:
        issues.append(Issue(
            type=IssueType.EARLY_DEPARTURE,
            message=(
                f"Early departure by {day.early_departure_minutes} minutes on {label} - "
                f"left at {day.last_punch}, expected after {config.check_out_time}"
            ),
            severity=_magnitude_severity(day.early_departure_minutes, config),
            day=day.day,
        ))

    if 0 < day.punch_count < config.expected_punches:
        issues.append(Issue(
            type=IssueType.INCOMPLETE_SHIFT,
            message=(
                f"Incomplete shift on {label} "
                f"({day.punch_count}/{config.expected_punches} punches recorded)"
            ),
            severity=Severity.MEDIUM,
            day=day.day,
        ))

    if not day.is_full_day:
        shortage = shortage_hours(day)
        reason = shortage_reason(shortage)
        issues.append(Issue(
            type=IssueType.HALF_DAY,
            message=(
                f"Half day on {label}: worked {time_utils.format_duration(day.work_duration_hours)} "
                f"of {time_utils.format_duration(day.required_hours)} required ({reason})"
            ),
            severity=Severity.HIGH if reason == MAJOR_SHORTAGE else Severity.MEDIUM,
            day=day.day,
        ))

    return issues


def count_by_type(issues: Iterable[Issue]) -> dict[str, int]:
    counts = {t.value: 0 for t in IssueType}
    for issue in issues:
        counts[issue.type.value] += 1
    return counts
