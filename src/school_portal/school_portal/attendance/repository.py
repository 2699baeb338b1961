from __future__ import annotations

from typing import Protocol, Sequence

from ..academics.model import AcademicScope
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def fetch_roster(self, scope: AcademicScope) -> Sequence[AttendanceRecord]:
        """Records of every student in scope; unmarked students have no status."""

        raise NotImplementedError

    def save_roster(self, records: Sequence[AttendanceRecord]) -> None:
        """Upsert the whole roster by (student, class date) in one request."""

        raise NotImplementedError

    def fetch_student_history(self, *, session_id: str, student_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
