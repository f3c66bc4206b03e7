from punchclock.core.enums import DayStatus
from punchclock.schemas.attendance import Employee
from punchclock.schemas.report import AttendanceSummary
from punchclock.services.calculations import average, percentage


def summarize(employee: Employee) -> AttendanceSummary:
    """Fold an employee's classified days into day counts and rates."""
    present = [d for d in employee.days if d.status is DayStatus.PRESENT]
    absent_days = sum(1 for d in employee.days if d.status is DayStatus.ABSENT)
    weekend_days = sum(1 for d in employee.days if d.status is DayStatus.WEEKEND_OFF)
    holiday_days = sum(1 for d in employee.days if d.status is DayStatus.HOLIDAY)
    working_days = len(present) + absent_days
    full_days = sum(1 for d in present if d.is_full_day)

    return AttendanceSummary(
        working_days=working_days,
        present_days=len(present),
        absent_days=absent_days,
        weekend_days=weekend_days,
        holiday_days=holiday_days,
        full_days=full_days,
        half_days=len(present) - full_days,
        attendance_rate=percentage(len(present), working_days),
        average_work_hours=average(d.work_duration_hours for d in present),
    )
