from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One student's mark for one class date.

    ``status`` is None while the student has not been marked yet.
    """

    student_id: str
    student_name: str
    session_id: str = ""
    class_id: str = ""
    section: str = ""
    class_date: str = ""
    status: Optional[AttendanceStatus] = None
    marked_by: str = ""
    teacher_name: str = ""

    @property
    def is_marked(self) -> bool:
        return self.status is not None


@dataclass(frozen=True)
class AttendanceSummary:
    """Counts behind the student attendance calendar."""

    present: int = 0
    absent: int = 0
    leave: int = 0

    @property
    def total(self) -> int:
        return self.present + self.absent + self.leave

    @property
    def percent(self) -> float:
        if self.total == 0:
            return 0.0
        return round(self.present / self.total * 100, 2)

    @property
    def percent_label(self) -> str:
        if self.total == 0:
            return "0%"
        return f"{self.present / self.total * 100:.2f}%"
