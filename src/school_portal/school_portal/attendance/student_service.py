from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..session.store import SessionStore
from .model import AttendanceRecord, AttendanceSummary
from .repository import AttendanceRepository


def summarize(records: Iterable[AttendanceRecord], *, year: Optional[int] = None, month: Optional[int] = None) -> AttendanceSummary:
    """Count marks, optionally restricted to one calendar month (1-12)."""
    prefix = f"{year:04d}-{month:02d}" if year is not None and month is not None else ""
    counts = {status: 0 for status in AttendanceStatus}
    for record in records:
        if prefix and not record.class_date.startswith(prefix):
            continue
        if record.status is not None:
            counts[record.status] += 1
    return AttendanceSummary(
        present=counts[AttendanceStatus.PRESENT],
        absent=counts[AttendanceStatus.ABSENT],
        leave=counts[AttendanceStatus.LEAVE],
    )


def by_date(records: Iterable[AttendanceRecord]) -> Dict[str, AttendanceStatus]:
    """Calendar lookup: class date -> mark."""
    return {r.class_date: r.status for r in records if r.status is not None}


class StudentAttendanceService:
    """Read-only attendance history for the logged-in student."""

    def __init__(self, attendance: AttendanceRepository, session: SessionStore):
        self._attendance = attendance
        self._session = session

    def history(self) -> Sequence[AttendanceRecord]:
        user = self._session.require_user()
        return self._attendance.fetch_student_history(session_id=user.session_id or "", student_id=user.user_id)

    def calendar(self, records: Optional[Iterable[AttendanceRecord]] = None) -> Dict[str, AttendanceStatus]:
        """Class date -> mark for the student's calendar view."""
        return by_date(self.history() if records is None else records)
