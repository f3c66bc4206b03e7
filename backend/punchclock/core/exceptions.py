class AttendanceError(Exception):
    """Base exception for attendance analysis failures."""


class ValidationError(AttendanceError):
    """
    Raised when the employee batch is structurally invalid.

    Carries every violation found, not just the first one.
    """

    def __init__(self, violations: list[str]) -> None:
        self.violations = list(violations)
        super().__init__(f"Data validation failed: {'; '.join(self.violations)}")
