"""
Shared fixtures for all tests.

Strategy:
- Every test runs against the default AttendanceConfig (department INN,
  June 2025, check-in 10:01, check-out 18:30) unless it builds its own.
- Employee records are generated for the whole report month; weekend flags
  come from the calendar so test data looks like a real extractor output.
- Excel fixtures are written with openpyxl into tmp_path, nothing is shared
  between tests.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Optional

import openpyxl
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from punchclock import report_calendar
from punchclock.core.config import AttendanceConfig
from punchclock.main import app
from punchclock.schemas.attendance import EmployeeRecord, PunchSet

# 09:45 -> 18:45 with a lunch break: Regular timing, 9h worked, no issues.
FULL_DAY: tuple[str, ...] = ("09:45", "13:00", "13:45", "18:45")

# June 2025 starts on a Sunday.
JUNE_2025_WEEKENDS: tuple[int, ...] = (1, 7, 8, 14, 15, 21, 22, 28, 29)
JUNE_2025_WORKING_DAYS = 21


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def config() -> AttendanceConfig:
    return AttendanceConfig()


# ---------------------------------------------------------------------------
# Employee record factories
# ---------------------------------------------------------------------------


def build_month(
    config: AttendanceConfig,
    punches: Optional[Mapping[int, Sequence[str]]] = None,
    default: Sequence[str] = FULL_DAY,
    last_day: int = 30,
) -> list[PunchSet]:
    """
    One PunchSet per day 1..last_day.

    Working days take their punches from ``punches`` (falling back to
    ``default``); weekend and holiday days carry no punches.
    """
    punches = punches or {}
    days: list[PunchSet] = []
    for day in range(1, last_day + 1):
        weekend = report_calendar.is_weekend(config, day)
        holiday = report_calendar.is_holiday(config, day)
        times: Sequence[str] = ()
        if not weekend and not holiday:
            times = punches.get(day, default)
        days.append(PunchSet(day=day, is_weekend=weekend, is_holiday=holiday, punch_times=times))
    return days


@pytest.fixture
def make_employee(config: AttendanceConfig) -> Callable[..., EmployeeRecord]:
    """
    Factory fixture: ``make_employee("E001", punches={2: ["10:30", "18:45"]})``.

    Pass ``default=()`` to make every unspecified working day an absence.
    """

    def _make(
        emp_id: str = "E001",
        name: str = "Employee One",
        punches: Optional[Mapping[int, Sequence[str]]] = None,
        default: Sequence[str] = FULL_DAY,
        last_day: int = 30,
        department: str = "INN",
    ) -> EmployeeRecord:
        return EmployeeRecord(
            id=emp_id,
            name=name,
            department=department,
            days=build_month(config, punches, default, last_day),
        )

    return _make


# ---------------------------------------------------------------------------
# HTTP client fixture
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def client() -> AsyncClient:
    """Fresh HTTPX async client per test function."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Sample Excel file fixtures
# ---------------------------------------------------------------------------


def _build_test_excel(path: Path) -> None:
    """
    Build a normalized punch sheet with:
    - 2 employees, days 2..6 of June 2025 (Mon-Fri)
    - E001 on time every day, E002 late on day 3 and absent on day 5
    - 1 row with an unparseable day (graceful degradation test)
    - 1 completely empty row (silently skipped)
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Punches"

    ws.append(["Employee Code", "Employee Name", "Dept", "Day", "Punches"])

    for day in range(2, 7):
        ws.append(["E001", "Asha Rao", "INN", day, "09:45 13:00 13:45 18:45"])

    ws.append(["E002", "Ravi Kumar", "INN", 2, "09:50 18:40"])
    ws.append(["E002", "Ravi Kumar", "INN", 3, "10:31 19:40"])
    ws.append(["E002", "Ravi Kumar", "INN", 4, "09:35 18:35"])
    ws.append(["E002", "Ravi Kumar", "INN", 5, ""])
    ws.append(["E002", "Ravi Kumar", "INN", 6, "09:40 18:31"])

    ws.append(["E002", "Ravi Kumar", "INN", "not-a-day", "09:40 18:31"])
    ws.append([None, None, None, None, None])

    wb.save(str(path))


@pytest.fixture
def sample_excel_path(tmp_path: Path) -> Path:
    path = tmp_path / "punches.xlsx"
    _build_test_excel(path)
    return path


@pytest.fixture
def invalid_excel_path(tmp_path: Path) -> Path:
    """A sheet with the right headers but no usable employee rows."""
    path = tmp_path / "invalid.xlsx"
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.append(["Employee Code", "Employee Name", "Day", "Punches"])
    ws.append(["E001", "Asha Rao", "not-a-day", "09:45 18:45"])
    ws.append([None, "Ravi Kumar", 2, "09:45 18:45"])
    wb.save(str(path))
    return path
