"""Per-employee attendance summary tests."""

from __future__ import annotations

from punchclock.core.config import AttendanceConfig
from punchclock.schemas.attendance import EmployeeRecord, PunchSet
from punchclock.services.aggregator import summarize
from punchclock.services.classifier import classify_employee
from tests.conftest import JUNE_2025_WEEKENDS, JUNE_2025_WORKING_DAYS


class TestSummarize:
    def test_perfect_month(self, config: AttendanceConfig, make_employee) -> None:
        summary = summarize(classify_employee(make_employee(), config))

        assert summary.working_days == JUNE_2025_WORKING_DAYS
        assert summary.present_days == JUNE_2025_WORKING_DAYS
        assert summary.weekend_days == len(JUNE_2025_WEEKENDS)
        assert summary.holiday_days == 0
        assert summary.absent_days == 0
        assert summary.full_days == JUNE_2025_WORKING_DAYS
        assert summary.half_days == 0
        assert summary.attendance_rate == 100
        assert summary.average_work_hours == 9.0

    def test_mixed_month(self, config: AttendanceConfig, make_employee) -> None:
        record = make_employee(punches={2: [], 3: ["10:30", "17:30"]})
        summary = summarize(classify_employee(record, config))

        assert summary.present_days == 20
        assert summary.absent_days == 1
        assert summary.working_days == summary.present_days + summary.absent_days
        assert summary.full_days == 19
        assert summary.half_days == 1
        # 20/21 present
        assert summary.attendance_rate == 95
        # (19 * 9.0 + 7.0) / 20
        assert summary.average_work_hours == 8.9

    def test_holidays_are_not_working_days(self) -> None:
        config = AttendanceConfig(holidays=frozenset({2, 3}))
        days = [
            PunchSet(day=2, is_holiday=True),
            PunchSet(day=3, is_holiday=True),
            PunchSet(day=4, punch_times=["09:45", "18:45"]),
        ]
        employee = classify_employee(EmployeeRecord(id="E001", name="A", days=days), config)
        summary = summarize(employee)

        assert summary.holiday_days == 2
        assert summary.working_days == 1
        assert summary.attendance_rate == 100

    def test_no_working_days(self, config: AttendanceConfig) -> None:
        days = [PunchSet(day=d, is_weekend=True) for d in (7, 8)]
        employee = classify_employee(EmployeeRecord(id="E001", name="A", days=days), config)
        summary = summarize(employee)

        assert summary.working_days == 0
        assert summary.attendance_rate == 0
        assert summary.average_work_hours == 0.0
