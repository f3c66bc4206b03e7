from __future__ import annotations

import logging
from collections.abc import Sequence

from punchclock.core.enums import PatternLabel, Severity, TimingCategory
from punchclock.schemas.attendance import ClassifiedDay, Employee
from punchclock.schemas.report import (
    HalfDay,
    HalfDayRecord,
    HalfDaySummary,
    TopHalfDayEmployee,
)
from punchclock.services.analyzers.base import IssueDetector, employee_ref
from punchclock.services.calculations import average, percentage, round_half_up, round_int

logger = logging.getLogger(__name__)

MAJOR_SHORTAGE = "Major Shortage"
SIGNIFICANT_SHORTAGE = "Significant Shortage"
MODERATE_SHORTAGE = "Moderate Shortage"
MINOR_SHORTAGE = "Minor Shortage"


def shortage_hours(day: ClassifiedDay) -> float:
    return round_half_up(max(0.0, day.required_hours - day.work_duration_hours), 2)


def shortage_reason(shortage: float) -> str:
    if shortage >= 4:
        return MAJOR_SHORTAGE
    if shortage >= 2:
        return SIGNIFICANT_SHORTAGE
    if shortage >= 1:
        return MODERATE_SHORTAGE
    return MINOR_SHORTAGE


class HalfDayAnalyzer(IssueDetector[HalfDayRecord, HalfDaySummary]):
    name = "half_day"

    def analyze(self, employee: Employee) -> HalfDayRecord:
        present = [d for d in employee.days if d.is_present]
        record = HalfDayRecord(present_days=len(present))
        if not present:
            return record

        for day in present:
            if day.is_full_day:
                continue
            shortage = shortage_hours(day)
            reason = shortage_reason(shortage)
            record.half_days.append(HalfDay(
                day=day.day,
                day_of_week=day.day_of_week,
                first_punch=day.first_punch,
                last_punch=day.last_punch,
                work_hours=day.work_duration_hours,
                required_hours=day.required_hours,
                shortage_hours=shortage,
                reason=reason,
                timing_category=day.timing_category,
            ))
            record.reasons[reason] = record.reasons.get(reason, 0) + 1

        record.total_half_days = len(record.half_days)
        record.average_work_hours = average(d.work_duration_hours for d in present)
        record.total_shortage_hours = round_half_up(sum(h.shortage_hours for h in record.half_days), 2)
        record.half_day_rate = percentage(record.total_half_days, len(present))
        if record.total_half_days:
            record.pattern = self._pattern(record)
            record.severity = self._severity(record)
        return record

    def summarize(self, employees: Sequence[Employee]) -> HalfDaySummary:
        summary = HalfDaySummary(
            severity_distribution={s.value: 0 for s in Severity},
        )
        top: list[TopHalfDayEmployee] = []
        work_hour_averages: list[float] = []
        total_shortage = 0.0

        for employee in employees:
            record = self.analyze(employee)
            work_hour_averages.append(record.average_work_hours)
            if record.total_half_days == 0:
                continue

            summary.employees_with_half_days += 1
            summary.total_half_days += record.total_half_days
            total_shortage += record.total_shortage_hours
            pattern = record.pattern.value
            summary.pattern_distribution[pattern] = summary.pattern_distribution.get(pattern, 0) + 1
            summary.severity_distribution[record.severity.value] += 1
            for reason, count in record.reasons.items():
                summary.reason_distribution[reason] = summary.reason_distribution.get(reason, 0) + count
            for half_day in record.half_days:
                if half_day.timing_category is TimingCategory.REGULAR:
                    summary.timing_category_stats.regular_half_days += 1
                else:
                    summary.timing_category_stats.unusual_half_days += 1

            top.append(TopHalfDayEmployee(
                **employee_ref(employee),
                half_days=record.total_half_days,
                half_day_rate=record.half_day_rate,
                average_work_hours=record.average_work_hours,
                total_shortage_hours=record.total_shortage_hours,
                pattern=record.pattern,
                severity=record.severity,
            ))

        summary.total_shortage_hours = round_half_up(total_shortage, 2)
        summary.average_work_hours = average(work_hour_averages)
        if summary.employees_with_half_days:
            summary.average_half_days_per_employee = round_int(
                summary.total_half_days / summary.employees_with_half_days
            )

        top.sort(key=lambda e: (e.half_days, e.half_day_rate), reverse=True)
        summary.top_half_day_employees = top[: self.config.top_n]

        logger.debug(
            "Half days: %d employees, %d days", summary.employees_with_half_days, summary.total_half_days
        )
        return summary

    def _pattern(self, record: HalfDayRecord) -> PatternLabel:
        t = self.config.half_day
        if record.half_day_rate >= t.chronic_rate:
            return PatternLabel.CHRONIC
        if record.half_day_rate >= t.frequent_rate:
            return PatternLabel.FREQUENT
        if record.total_half_days >= t.regular_days:
            return PatternLabel.REGULAR
        if record.total_half_days >= t.occasional_days:
            return PatternLabel.OCCASIONAL
        return PatternLabel.RARE

    def _severity(self, record: HalfDayRecord) -> Severity:
        t = self.config.half_day
        if record.half_day_rate >= t.high_rate or record.total_half_days >= t.high_days:
            return Severity.HIGH
        if record.half_day_rate >= t.medium_rate or record.total_half_days >= t.medium_days:
            return Severity.MEDIUM
        return Severity.LOW
