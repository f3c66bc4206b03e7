from __future__ import annotations

import logging
from collections.abc import Sequence

from punchclock.core.enums import PatternLabel, Severity
from punchclock.schemas.attendance import ClassifiedDay, Employee
from punchclock.schemas.report import (
    LateArrivalRecord,
    LateArrivalSummary,
    LateDay,
    TopLateEmployee,
)
from punchclock.services.analyzers.base import IssueDetector, employee_ref
from punchclock.services.calculations import round_int

logger = logging.getLogger(__name__)


def _is_late(day: ClassifiedDay) -> bool:
    return day.is_present and day.is_late


class LateArrivalAnalyzer(IssueDetector[LateArrivalRecord, LateArrivalSummary]):
    name = "late_arrival"

    def analyze(self, employee: Employee) -> LateArrivalRecord:
        late_days: list[LateDay] = []
        streak = 0
        max_streak = 0

        # Streaks run over working days only; weekends and holidays neither extend nor break them.
        for day in employee.working_days:
            if _is_late(day):
                late_days.append(LateDay(
                    day=day.day,
                    day_of_week=day.day_of_week,
                    arrival_time=day.first_punch,
                    late_minutes=day.late_minutes,
                ))
                streak += 1
                max_streak = max(max_streak, streak)
            else:
                streak = 0

        if not late_days:
            return LateArrivalRecord()

        total_minutes = sum(d.late_minutes for d in late_days)
        average_minutes = round_int(total_minutes / len(late_days))

        return LateArrivalRecord(
            total_late_days=len(late_days),
            total_late_minutes=total_minutes,
            average_late_minutes=average_minutes,
            max_late_minutes=max(d.late_minutes for d in late_days),
            max_consecutive_late_days=max_streak,
            pattern=self._pattern(len(late_days), average_minutes),
            severity=self._severity(len(late_days), average_minutes),
            late_days=late_days,
        )

    def summarize(self, employees: Sequence[Employee]) -> LateArrivalSummary:
        summary = LateArrivalSummary(
            severity_distribution={s.value: 0 for s in Severity},
        )
        top: list[TopLateEmployee] = []

        for employee in employees:
            record = self.analyze(employee)
            if record.total_late_days == 0:
                continue

            summary.employees_with_late_arrivals += 1
            summary.total_late_days += record.total_late_days
            summary.total_late_minutes += record.total_late_minutes
            pattern = record.pattern.value
            summary.pattern_distribution[pattern] = summary.pattern_distribution.get(pattern, 0) + 1
            summary.severity_distribution[record.severity.value] += 1

            top.append(TopLateEmployee(
                **employee_ref(employee),
                late_days=record.total_late_days,
                total_late_minutes=record.total_late_minutes,
                average_late_minutes=record.average_late_minutes,
                pattern=record.pattern,
                severity=record.severity,
            ))

        if summary.employees_with_late_arrivals:
            summary.average_late_minutes_per_employee = round_int(
                summary.total_late_minutes / summary.employees_with_late_arrivals
            )

        top.sort(key=lambda e: (e.late_days, e.average_late_minutes), reverse=True)
        summary.top_late_employees = top[: self.config.top_n]

        logger.debug(
            "Late arrivals: %d employees, %d days, %d minutes",
            summary.employees_with_late_arrivals, summary.total_late_days, summary.total_late_minutes,
        )
        return summary

    def _pattern(self, late_days: int, average_minutes: int) -> PatternLabel:
        t = self.config.late_arrival
        if late_days >= t.chronic_days:
            return PatternLabel.CHRONIC
        if late_days >= t.frequent_days:
            return PatternLabel.FREQUENT
        if average_minutes >= t.severe_avg_minutes:
            return PatternLabel.SEVERE
        if late_days >= t.occasional_days:
            return PatternLabel.OCCASIONAL
        return PatternLabel.NONE

    def _severity(self, late_days: int, average_minutes: int) -> Severity:
        t = self.config.late_arrival
        if late_days >= t.high_days or average_minutes >= t.high_avg_minutes:
            return Severity.HIGH
        if late_days >= t.medium_days or average_minutes >= t.medium_avg_minutes:
            return Severity.MEDIUM
        return Severity.LOW
