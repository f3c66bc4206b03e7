import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_TIME_RE = re.compile(r"^([01]?\d|2[0-3]):[0-5]\d$")


class LateArrivalThresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    chronic_days: int = 15
    frequent_days: int = 8
    severe_avg_minutes: int = 30
    occasional_days: int = 3

    high_days: int = 10
    high_avg_minutes: int = 45
    medium_days: int = 5
    medium_avg_minutes: int = 20


class AbsenceThresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    chronic_rate: int = 30
    extended_leave_run: int = 5
    frequent_rate: int = 15
    consecutive_run: int = 3
    occasional_days: int = 3

    high_rate: int = 25
    high_run: int = 5
    medium_rate: int = 10
    medium_run: int = 3


class HalfDayThresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    chronic_rate: int = 50
    frequent_rate: int = 30
    regular_days: int = 5
    occasional_days: int = 3

    high_rate: int = 40
    high_days: int = 8
    medium_rate: int = 20
    medium_days: int = 4


class AttendanceConfig(BaseModel):
    """
    Every knob the analysis core reads.

    Built once at the boundary and passed explicitly to the classifier,
    the detectors and the orchestrator.
    """

    model_config = ConfigDict(frozen=True)

    check_in_time: str = "10:01"
    check_out_time: str = "18:30"
    regular_start: str = "09:30"
    regular_end: str = "10:01"
    regular_required_hours: float = 8.75
    unusual_required_hours: float = 9.0

    severity_threshold_minutes: int = 30
    expected_punches: int = Field(default=4, ge=1)

    late_score_per_minute: int = 2
    absence_penalty_per_day: int = 5
    absence_penalty_cap: int = 25

    top_n: int = Field(default=10, ge=1)
    punctuality_top_n: int = Field(default=5, ge=1)

    department: str = "INN"
    report_year: int = 2025
    report_month: int = Field(default=6, ge=1, le=12)
    holidays: frozenset[int] = frozenset()

    late_arrival: LateArrivalThresholds = LateArrivalThresholds()
    absence: AbsenceThresholds = AbsenceThresholds()
    half_day: HalfDayThresholds = HalfDayThresholds()

    @field_validator("check_in_time", "check_out_time", "regular_start", "regular_end")
    @classmethod
    def valid_clock_time(cls, v: str) -> str:
        v = v.strip()
        if not _TIME_RE.match(v):
            raise ValueError(f"Expected HH:MM, got '{v}'")
        return v

    @model_validator(mode="after")
    def regular_window_ordered(self) -> "AttendanceConfig":
        start_h, start_m = map(int, self.regular_start.split(":"))
        end_h, end_m = map(int, self.regular_end.split(":"))
        if start_h * 60 + start_m > end_h * 60 + end_m:
            raise ValueError("regular_start must not be after regular_end")
        return self


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    MAX_UPLOAD_MB: int = 50

    DEPARTMENT_NAME: str = "INN"
    REPORT_YEAR: int = 2025
    REPORT_MONTH: int = 6
    HOLIDAYS: list[int] = []

    CHECK_IN_TIME: str = "10:01"
    CHECK_OUT_TIME: str = "18:30"
    REGULAR_TIMING_START: str = "09:30"
    REGULAR_TIMING_END: str = "10:01"
    REGULAR_REQUIRED_HOURS: float = 8.75
    UNUSUAL_REQUIRED_HOURS: float = 9.0
    SEVERITY_THRESHOLD_MINUTES: int = 30
    EXPECTED_PUNCHES: int = 4

    def attendance_config(self) -> AttendanceConfig:
        return AttendanceConfig(
            check_in_time=self.CHECK_IN_TIME,
            check_out_time=self.CHECK_OUT_TIME,
            regular_start=self.REGULAR_TIMING_START,
            regular_end=self.REGULAR_TIMING_END,
            regular_required_hours=self.REGULAR_REQUIRED_HOURS,
            unusual_required_hours=self.UNUSUAL_REQUIRED_HOURS,
            severity_threshold_minutes=self.SEVERITY_THRESHOLD_MINUTES,
            expected_punches=self.EXPECTED_PUNCHES,
            department=self.DEPARTMENT_NAME,
            report_year=self.REPORT_YEAR,
            report_month=self.REPORT_MONTH,
            holidays=frozenset(self.HOLIDAYS),
        )


settings = Settings()
