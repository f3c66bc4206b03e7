from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Generic, TypeVar

from punchclock.core.config import AttendanceConfig
from punchclock.schemas.attendance import Employee
from punchclock.schemas.report import EmployeeRef

RecordT = TypeVar("RecordT")
SummaryT = TypeVar("SummaryT")


class IssueDetector(ABC, Generic[RecordT, SummaryT]):
    """
    One analysis pass over classified days.

    Every detector answers both questions: what does this employee look like
    (``analyze``) and what does the whole department look like (``summarize``).
    """

    name: str = "detector"

    def __init__(self, config: AttendanceConfig) -> None:
        self.config = config

    @abstractmethod
    def analyze(self, employee: Employee) -> RecordT:
        raise NotImplementedError

    @abstractmethod
    def summarize(self, employees: Sequence[Employee]) -> SummaryT:
        raise NotImplementedError


def employee_ref(employee: Employee) -> dict[str, str]:
    return EmployeeRef(
        id=employee.id, name=employee.name, department=employee.department
    ).model_dump()
