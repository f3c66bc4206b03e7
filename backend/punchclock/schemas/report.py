from typing import Literal, Optional

from pydantic import BaseModel, Field

from punchclock.core.enums import (
    IssueType,
    PatternLabel,
    RankingCategory,
    Severity,
    TimingCategory,
)
from punchclock.schemas.attendance import ClassifiedDay


class EmployeeRef(BaseModel):
    id: str
    name: str
    department: str


class AttendanceSummary(BaseModel):
    working_days: int
    present_days: int
    absent_days: int
    weekend_days: int
    holiday_days: int
    full_days: int
    half_days: int
    attendance_rate: int
    average_work_hours: float


# ---------------------------------------------------------------------------
# Per-employee detector records
# ---------------------------------------------------------------------------


class LateDay(BaseModel):
    day: int
    day_of_week: Optional[str]
    arrival_time: str
    late_minutes: int


class LateArrivalRecord(BaseModel):
    total_late_days: int = 0
    total_late_minutes: int = 0
    average_late_minutes: int = 0
    max_late_minutes: int = 0
    max_consecutive_late_days: int = 0
    pattern: PatternLabel = PatternLabel.NONE
    severity: Severity = Severity.LOW
    late_days: list[LateDay] = []


class AbsentDay(BaseModel):
    day: int
    day_of_week: Optional[str]
    reason: str


class ConsecutiveAbsence(BaseModel):
    start_day: int
    end_day: int
    days: int


class AbsenceRecord(BaseModel):
    working_days: int = 0
    total_absent_days: int = 0
    absence_rate: int = 0
    max_consecutive_days: int = 0
    pattern: PatternLabel = PatternLabel.NONE
    severity: Severity = Severity.LOW
    absent_days: list[AbsentDay] = []
    consecutive_absences: list[ConsecutiveAbsence] = []


class HalfDay(BaseModel):
    day: int
    day_of_week: Optional[str]
    first_punch: Optional[str]
    last_punch: Optional[str]
    work_hours: float
    required_hours: float
    shortage_hours: float
    reason: str
    timing_category: Optional[TimingCategory]


class HalfDayRecord(BaseModel):
    present_days: int = 0
    total_half_days: int = 0
    half_day_rate: int = 0
    average_work_hours: float = 0.0
    total_shortage_hours: float = 0.0
    pattern: PatternLabel = PatternLabel.NONE
    severity: Severity = Severity.LOW
    half_days: list[HalfDay] = []
    reasons: dict[str, int] = {}


class PunctualityRecord(BaseModel):
    punctuality_score: int = 0
    consistency_score: int = 100
    working_days: int = 0
    punctual_days: int = 0
    late_days: int = 0
    absent_days: int = 0
    absence_penalty: int = 0


class RankedEmployee(EmployeeRef, PunctualityRecord):
    rank: int
    ranking: RankingCategory


# ---------------------------------------------------------------------------
# Population summaries
# ---------------------------------------------------------------------------


class TopLateEmployee(EmployeeRef):
    late_days: int
    total_late_minutes: int
    average_late_minutes: int
    pattern: PatternLabel
    severity: Severity


class LateArrivalSummary(BaseModel):
    employees_with_late_arrivals: int = 0
    total_late_days: int = 0
    total_late_minutes: int = 0
    average_late_minutes_per_employee: int = 0
    top_late_employees: list[TopLateEmployee] = []
    pattern_distribution: dict[str, int] = {}
    severity_distribution: dict[str, int] = {}


class TopAbsentEmployee(EmployeeRef):
    absent_days: int
    absence_rate: int
    max_consecutive_days: int
    pattern: PatternLabel
    severity: Severity


class ConsecutiveAbsenceStats(BaseModel):
    employees_with_consecutive_absences: int = 0
    longest_consecutive_absence: int = 0
    average_consecutive_length: int = 0


class AbsenceSummary(BaseModel):
    employees_with_absences: int = 0
    total_absent_days: int = 0
    average_absent_days_per_employee: int = 0
    highest_absence_rate: int = 0
    top_absent_employees: list[TopAbsentEmployee] = []
    pattern_distribution: dict[str, int] = {}
    severity_distribution: dict[str, int] = {}
    consecutive_stats: ConsecutiveAbsenceStats = Field(default_factory=ConsecutiveAbsenceStats)


class TopHalfDayEmployee(EmployeeRef):
    half_days: int
    half_day_rate: int
    average_work_hours: float
    total_shortage_hours: float
    pattern: PatternLabel
    severity: Severity


class TimingCategoryStats(BaseModel):
    regular_half_days: int = 0
    unusual_half_days: int = 0


class HalfDaySummary(BaseModel):
    employees_with_half_days: int = 0
    total_half_days: int = 0
    total_shortage_hours: float = 0.0
    average_half_days_per_employee: int = 0
    average_work_hours: float = 0.0
    top_half_day_employees: list[TopHalfDayEmployee] = []
    pattern_distribution: dict[str, int] = {}
    reason_distribution: dict[str, int] = {}
    severity_distribution: dict[str, int] = {}
    timing_category_stats: TimingCategoryStats = Field(default_factory=TimingCategoryStats)


class PunctualitySummary(BaseModel):
    total_employees: int = 0
    average_punctuality_score: int = 0
    top_performers: list[RankedEmployee] = []
    needs_improvement: list[RankedEmployee] = []
    perfect_attendance: list[RankedEmployee] = []
    score_distribution: dict[str, int] = {}
    consistency_distribution: dict[str, int] = {}
    ranking_distribution: dict[str, int] = {}


# ---------------------------------------------------------------------------
# Issues and the assembled report
# ---------------------------------------------------------------------------


class Issue(BaseModel):
    type: IssueType
    message: str
    severity: Severity
    day: int


class EmployeeIssues(BaseModel):
    employee: EmployeeRef
    issues: list[Issue]
    issue_counts: dict[str, int]
    attendance: AttendanceSummary
    late_arrival_details: LateArrivalRecord
    absence_details: AbsenceRecord
    half_day_details: HalfDayRecord


class EmployeeSummary(EmployeeRef):
    attendance: AttendanceSummary
    has_issues: bool
    issue_count: int
    days: list[ClassifiedDay]


class SeverityBreakdown(BaseModel):
    high: int = 0
    medium: int = 0


class IssueTypeCount(BaseModel):
    type: IssueType
    count: int


class DailyBreakdown(BaseModel):
    day: int
    day_of_week: Optional[str]
    is_weekend: bool
    is_holiday: bool
    present: int
    absent: int
    late: int
    half_days: int
    total_late_minutes: int


class AnalysisReport(BaseModel):
    department: str
    report_year: int
    report_month: int
    total_employees: int
    employees_with_issues: int
    total_issues: int
    employees: list[EmployeeSummary]
    issues: list[EmployeeIssues]
    late_arrival_summary: LateArrivalSummary
    absence_summary: AbsenceSummary
    half_day_summary: HalfDaySummary
    punctuality_summary: PunctualitySummary
    punctuality_ranking: list[RankedEmployee]
    severity_breakdown: SeverityBreakdown
    top_issue_types: list[IssueTypeCount]
    daily_breakdown: list[DailyBreakdown]


class OverallScore(BaseModel):
    overall_score: int
    punctuality_score: int
    attendance_score: int
    work_hours_score: int
    rating: str


class EmployeeReport(BaseModel):
    employee: EmployeeRef
    attendance: AttendanceSummary
    issues: list[Issue]
    late_arrival_details: LateArrivalRecord
    absence_details: AbsenceRecord
    half_day_details: HalfDayRecord
    punctuality_details: PunctualityRecord
    overall_score: OverallScore


class UploadAnalysisResponse(BaseModel):
    filename: str
    employee_count: int
    error_count: int
    errors: list[str]
    status: Literal["success", "partial"]
    report: AnalysisReport
