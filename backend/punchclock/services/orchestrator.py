"""
Attendance analysis orchestration.

Validates the whole batch up front, classifies every employee once, then runs
the four detectors, the day-issue extraction and the cross-cutting summaries
over the same classified data. Employees are independent of each other; only
the streak scans inside the detectors depend on calendar order.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from collections.abc import Sequence

from punchclock.core.config import AttendanceConfig
from punchclock.core.enums import DayStatus, Severity
from punchclock.core.exceptions import ValidationError
from punchclock.schemas.attendance import Employee, EmployeeRecord
from punchclock.schemas.report import (
    AnalysisReport,
    DailyBreakdown,
    EmployeeIssues,
    EmployeeRef,
    EmployeeReport,
    EmployeeSummary,
    Issue,
    IssueTypeCount,
    OverallScore,
    SeverityBreakdown,
)
from punchclock.services import aggregator
from punchclock.services.analyzers.absence import AbsenceAnalyzer
from punchclock.services.analyzers.half_day import HalfDayAnalyzer
from punchclock.services.analyzers.late_arrival import LateArrivalAnalyzer
from punchclock.services.analyzers.punctuality import PunctualityAnalyzer
from punchclock.services.calculations import round_int
from punchclock.services.classifier import classify_employee
from punchclock.services.issues import count_by_type, extract_issues

logger = logging.getLogger(__name__)

MAX_DAYS_PER_PERIOD = 31
TOP_ISSUE_TYPES = 5

_PUNCTUALITY_WEIGHT = 0.4
_ATTENDANCE_WEIGHT = 0.35
_WORK_HOURS_WEIGHT = 0.25


def validate_employees(records: Sequence[EmployeeRecord]) -> None:
    """Raise ValidationError listing every structural problem in the batch."""
    violations: list[str] = []

    if not records:
        raise ValidationError(["No employees supplied"])

    seen_ids: set[str] = set()
    for index, record in enumerate(records):
        who = f"Employee {index}" + (f" ({record.id})" if record.id else "")

        if not record.id:
            violations.append(f"{who}: id is required")
        elif record.id in seen_ids:
            violations.append(f"{who}: id '{record.id}' appears more than once")
        else:
            seen_ids.add(record.id)

        if not record.name:
            violations.append(f"{who}: name is required")

        if not record.days:
            violations.append(f"{who}: at least one day record is required")
        elif len(record.days) > MAX_DAYS_PER_PERIOD:
            violations.append(
                f"{who}: {len(record.days)} day records exceed the {MAX_DAYS_PER_PERIOD}-day period"
            )

        day_counts = Counter(p.day for p in record.days)
        for day in sorted(day_counts):
            if not 1 <= day <= MAX_DAYS_PER_PERIOD:
                violations.append(f"{who}: day {day} is outside 1..{MAX_DAYS_PER_PERIOD}")
            if day_counts[day] > 1:
                violations.append(f"{who}: day {day} appears more than once")

    if violations:
        logger.warning("Validation failed with %d violation(s)", len(violations))
        raise ValidationError(violations)


def _ref(employee: Employee) -> EmployeeRef:
    return EmployeeRef(id=employee.id, name=employee.name, department=employee.department)


def _score_rating(score: int) -> str:
    if score >= 90:
        return "Excellent"
    if score >= 80:
        return "Good"
    if score >= 70:
        return "Satisfactory"
    if score >= 60:
        return "Needs Improvement"
    return "Poor"


class AttendanceOrchestrator:
    def __init__(self, config: AttendanceConfig) -> None:
        self.config = config
        self.late_arrivals = LateArrivalAnalyzer(config)
        self.absences = AbsenceAnalyzer(config)
        self.half_days = HalfDayAnalyzer(config)
        self.punctuality = PunctualityAnalyzer(config)

    def classify(self, records: Sequence[EmployeeRecord]) -> list[Employee]:
        return [classify_employee(record, self.config) for record in records]

    def day_issues(self, employee: Employee) -> list[Issue]:
        issues: list[Issue] = []
        for day in employee.days:
            issues.extend(extract_issues(day, self.config))
        return issues

    def analyze(self, records: Sequence[EmployeeRecord]) -> AnalysisReport:
        started = time.perf_counter()
        logger.info(
            "Starting %s attendance analysis for %d employee(s)",
            self.config.department, len(records),
        )

        validate_employees(records)
        employees = self.classify(records)

        roster: list[EmployeeSummary] = []
        issue_view: list[EmployeeIssues] = []
        all_issues: list[Issue] = []

        for employee in employees:
            issues = self.day_issues(employee)
            attendance = aggregator.summarize(employee)
            all_issues.extend(issues)
            roster.append(EmployeeSummary(
                **_ref(employee).model_dump(),
                attendance=attendance,
                has_issues=bool(issues),
                issue_count=len(issues),
                days=list(employee.days),
            ))
            if issues:
                issue_view.append(EmployeeIssues(
                    employee=_ref(employee),
                    issues=issues,
                    issue_counts=count_by_type(issues),
                    attendance=attendance,
                    late_arrival_details=self.late_arrivals.analyze(employee),
                    absence_details=self.absences.analyze(employee),
                    half_day_details=self.half_days.analyze(employee),
                ))

        ranking = self.punctuality.rank(employees)
        summaries = {}
        for detector in (self.late_arrivals, self.absences, self.half_days):
            summaries[detector.name] = detector.summarize(employees)
            logger.debug("Detector '%s' summarized %d employee(s)", detector.name, len(employees))
        summaries[self.punctuality.name] = self.punctuality.summarize(employees, ranking)
        logger.debug(
            "Detector '%s' summarized %d employee(s)", self.punctuality.name, len(employees),
        )

        report = AnalysisReport(
            department=self.config.department,
            report_year=self.config.report_year,
            report_month=self.config.report_month,
            total_employees=len(employees),
            employees_with_issues=len(issue_view),
            total_issues=len(all_issues),
            employees=roster,
            issues=issue_view,
            late_arrival_summary=summaries[self.late_arrivals.name],
            absence_summary=summaries[self.absences.name],
            half_day_summary=summaries[self.half_days.name],
            punctuality_summary=summaries[self.punctuality.name],
            punctuality_ranking=ranking,
            severity_breakdown=self.severity_breakdown(all_issues),
            top_issue_types=self.top_issue_types(all_issues),
            daily_breakdown=self.daily_breakdown(employees),
        )

        logger.info(
            "Analysis completed: employees=%d, with_issues=%d, issues=%d (%.1f ms)",
            report.total_employees, report.employees_with_issues, report.total_issues,
            (time.perf_counter() - started) * 1000,
        )
        return report

    def analyze_employee(self, record: EmployeeRecord) -> EmployeeReport:
        """Detailed report for a single employee, including the weighted overall score."""
        validate_employees([record])
        employee = classify_employee(record, self.config)

        attendance = aggregator.summarize(employee)
        absence = self.absences.analyze(employee)
        half_day = self.half_days.analyze(employee)
        punctuality = self.punctuality.analyze(employee)

        attendance_score = max(0, 100 - absence.absence_rate)
        work_hours_score = min(
            100, round_int(half_day.average_work_hours / self.config.regular_required_hours * 100)
        )
        overall = round_int(
            punctuality.punctuality_score * _PUNCTUALITY_WEIGHT
            + attendance_score * _ATTENDANCE_WEIGHT
            + work_hours_score * _WORK_HOURS_WEIGHT
        )

        return EmployeeReport(
            employee=_ref(employee),
            attendance=attendance,
            issues=self.day_issues(employee),
            late_arrival_details=self.late_arrivals.analyze(employee),
            absence_details=absence,
            half_day_details=half_day,
            punctuality_details=punctuality,
            overall_score=OverallScore(
                overall_score=overall,
                punctuality_score=punctuality.punctuality_score,
                attendance_score=attendance_score,
                work_hours_score=work_hours_score,
                rating=_score_rating(overall),
            ),
        )

    @staticmethod
    def severity_breakdown(issues: Sequence[Issue]) -> SeverityBreakdown:
        high = sum(1 for issue in issues if issue.severity is Severity.HIGH)
        return SeverityBreakdown(high=high, medium=len(issues) - high)

    @staticmethod
    def top_issue_types(issues: Sequence[Issue]) -> list[IssueTypeCount]:
        counts = Counter(issue.type for issue in issues)
        return [
            IssueTypeCount(type=issue_type, count=count)
            for issue_type, count in counts.most_common(TOP_ISSUE_TYPES)
        ]

    def daily_breakdown(self, employees: Sequence[Employee]) -> list[DailyBreakdown]:
        by_day: dict[int, list] = {}
        for employee in employees:
            for day in employee.days:
                by_day.setdefault(day.day, []).append(day)

        breakdown: list[DailyBreakdown] = []
        for day_number in sorted(by_day):
            days = by_day[day_number]
            late = [d for d in days if d.is_present and d.is_late]
            breakdown.append(DailyBreakdown(
                day=day_number,
                day_of_week=days[0].day_of_week,
                is_weekend=all(d.status is DayStatus.WEEKEND_OFF for d in days),
                is_holiday=all(d.status is DayStatus.HOLIDAY for d in days),
                present=sum(1 for d in days if d.is_present),
                absent=sum(1 for d in days if d.is_absent),
                late=len(late),
                half_days=sum(1 for d in days if d.is_half_day),
                total_late_minutes=sum(d.late_minutes for d in late),
            ))
        return breakdown
