from enum import Enum


class DayStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    WEEKEND_OFF = "WeekendOff"
    HOLIDAY = "Holiday"


class TimingCategory(str, Enum):
    REGULAR = "Regular"
    UNUSUAL = "Unusual"


class IssueType(str, Enum):
    ABSENT = "ABSENT"
    LATE_ARRIVAL = "LATE_ARRIVAL"
    EARLY_DEPARTURE = "EARLY_DEPARTURE"
    HALF_DAY = "HALF_DAY"
    MISSING_PUNCH_IN = "MISSING_PUNCH_IN"
    MISSING_PUNCH_OUT = "MISSING_PUNCH_OUT"
    INCOMPLETE_SHIFT = "INCOMPLETE_SHIFT"


class Severity(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class PatternLabel(str, Enum):
    NONE = "None"
    RARE = "Rare"
    OCCASIONAL = "Occasional"
    REGULAR = "Regular"
    FREQUENT = "Frequent"
    SEVERE = "Severe"
    CONSECUTIVE = "Consecutive"
    EXTENDED_LEAVE = "Extended Leave"
    CHRONIC = "Chronic"


class RankingCategory(str, Enum):
    TOP_PERFORMER = "Top Performer"
    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    NEEDS_IMPROVEMENT = "Needs Improvement"
