from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from punchclock.core.enums import DayStatus, TimingCategory

_INPUT_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class PunchSet(BaseModel):
    """Raw punches of one employee on one calendar day, as the extractor yields them."""

    model_config = _INPUT_CONFIG

    day: int
    is_weekend: bool = False
    is_holiday: bool = False
    punch_times: tuple[str, ...] = ()

    @field_validator("punch_times", mode="before")
    @classmethod
    def coerce_punches(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,)
        return tuple(str(item).strip() for item in v if item is not None)


class EmployeeRecord(BaseModel):
    """
    One employee row of the input contract.

    ``id`` and ``name`` default to empty so that a missing value reaches the
    orchestrator's validation pass, which reports every violation at once.
    """

    model_config = _INPUT_CONFIG

    id: str = ""
    name: str = ""
    department: str = ""
    days: tuple[PunchSet, ...] = ()

    @field_validator("id", "name", "department", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v).strip()


class ClassifiedDay(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: int
    day_of_week: Optional[str] = None
    status: DayStatus
    timing_category: Optional[TimingCategory] = None
    first_punch: Optional[str] = None
    last_punch: Optional[str] = None
    punch_count: int = 0
    work_duration_hours: float = 0.0
    required_hours: float = 0.0
    is_full_day: bool = False
    late_minutes: int = 0
    is_late: bool = False
    early_departure_minutes: int = 0
    is_early_departure: bool = False

    @property
    def is_working_day(self) -> bool:
        return self.status in (DayStatus.PRESENT, DayStatus.ABSENT)

    @property
    def is_present(self) -> bool:
        return self.status is DayStatus.PRESENT

    @property
    def is_absent(self) -> bool:
        return self.status is DayStatus.ABSENT

    @property
    def is_half_day(self) -> bool:
        return self.status is DayStatus.PRESENT and not self.is_full_day


class Employee(BaseModel):
    """An employee with the classified days of the reporting period, in calendar order."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    department: str = ""
    days: tuple[ClassifiedDay, ...] = ()

    @property
    def working_days(self) -> list[ClassifiedDay]:
        return [d for d in self.days if d.is_working_day]
