from __future__ import annotations

import logging
from collections.abc import Sequence

from punchclock.core.enums import PatternLabel, Severity
from punchclock.schemas.attendance import Employee
from punchclock.schemas.report import (
    AbsenceRecord,
    AbsenceSummary,
    AbsentDay,
    ConsecutiveAbsence,
    TopAbsentEmployee,
)
from punchclock.services.analyzers.base import IssueDetector, employee_ref
from punchclock.services.calculations import percentage, round_int

logger = logging.getLogger(__name__)

_NO_PUNCH_REASON = "No punches recorded"


class AbsenceAnalyzer(IssueDetector[AbsenceRecord, AbsenceSummary]):
    name = "absence"

    def analyze(self, employee: Employee) -> AbsenceRecord:
        working_days = employee.working_days
        record = AbsenceRecord(working_days=len(working_days))
        run: list[int] = []

        def flush() -> None:
            if len(run) > 1:
                record.consecutive_absences.append(
                    ConsecutiveAbsence(start_day=run[0], end_day=run[-1], days=len(run))
                )
                record.max_consecutive_days = max(record.max_consecutive_days, len(run))
            run.clear()

        for day in working_days:
            if day.is_absent:
                record.absent_days.append(
                    AbsentDay(day=day.day, day_of_week=day.day_of_week, reason=_NO_PUNCH_REASON)
                )
                run.append(day.day)
            else:
                flush()
        flush()

        record.total_absent_days = len(record.absent_days)
        if record.total_absent_days == 0:
            return record

        record.absence_rate = percentage(record.total_absent_days, len(working_days))
        record.pattern = self._pattern(record)
        record.severity = self._severity(record)
        return record

    def summarize(self, employees: Sequence[Employee]) -> AbsenceSummary:
        summary = AbsenceSummary(
            severity_distribution={s.value: 0 for s in Severity},
        )
        top: list[TopAbsentEmployee] = []
        run_count = 0
        run_days = 0

        for employee in employees:
            record = self.analyze(employee)
            if record.total_absent_days == 0:
                continue

            summary.employees_with_absences += 1
            summary.total_absent_days += record.total_absent_days
            summary.highest_absence_rate = max(summary.highest_absence_rate, record.absence_rate)
            pattern = record.pattern.value
            summary.pattern_distribution[pattern] = summary.pattern_distribution.get(pattern, 0) + 1
            summary.severity_distribution[record.severity.value] += 1

            if record.consecutive_absences:
                stats = summary.consecutive_stats
                stats.employees_with_consecutive_absences += 1
                stats.longest_consecutive_absence = max(
                    stats.longest_consecutive_absence, record.max_consecutive_days
                )
                run_count += len(record.consecutive_absences)
                run_days += sum(r.days for r in record.consecutive_absences)

            top.append(TopAbsentEmployee(
                **employee_ref(employee),
                absent_days=record.total_absent_days,
                absence_rate=record.absence_rate,
                max_consecutive_days=record.max_consecutive_days,
                pattern=record.pattern,
                severity=record.severity,
            ))

        if summary.employees_with_absences:
            summary.average_absent_days_per_employee = round_int(
                summary.total_absent_days / summary.employees_with_absences
            )
        if run_count:
            summary.consecutive_stats.average_consecutive_length = round_int(run_days / run_count)

        top.sort(key=lambda e: (e.absent_days, e.absence_rate), reverse=True)
        summary.top_absent_employees = top[: self.config.top_n]

        logger.debug(
            "Absences: %d employees, %d days", summary.employees_with_absences, summary.total_absent_days
        )
        return summary

    def _pattern(self, record: AbsenceRecord) -> PatternLabel:
        t = self.config.absence
        if record.absence_rate >= t.chronic_rate:
            return PatternLabel.CHRONIC
        if record.max_consecutive_days >= t.extended_leave_run:
            return PatternLabel.EXTENDED_LEAVE
        if record.absence_rate >= t.frequent_rate:
            return PatternLabel.FREQUENT
        if record.max_consecutive_days >= t.consecutive_run:
            return PatternLabel.CONSECUTIVE
        if record.total_absent_days >= t.occasional_days:
            return PatternLabel.OCCASIONAL
        return PatternLabel.RARE

    def _severity(self, record: AbsenceRecord) -> Severity:
        t = self.config.absence
        if record.absence_rate >= t.high_rate or record.max_consecutive_days >= t.high_run:
            return Severity.HIGH
        if record.absence_rate >= t.medium_rate or record.max_consecutive_days >= t.medium_run:
            return Severity.MEDIUM
        return Severity.LOW
