from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Tuple, Union

from ..academics.model import AcademicScope
from ..common.cancellation import CancellationScope
from ..core.constants import SAVE_ATTENDANCE_LABEL, SYSTEM_MARKER, UPDATE_ATTENDANCE_LABEL
from ..core.enums import AttendanceStatus
from ..core.exceptions import ApplicationError, GatewayError, ValidationError
from ..core.notice import Notice
from ..session.model import AuthenticatedUser
from ..session.store import SessionStore
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .roster import default_fill, sort_by_name

logger = logging.getLogger(__name__)


class AttendanceWorkflow:
    """Marking screen: fetch the roster, edit marks locally, save in bulk.

    Edits never touch the network; ``save`` sends the whole roster at once.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        session: SessionStore,
        *,
        cancellation: Optional[CancellationScope] = None,
    ):
        self._attendance = attendance
        self._session = session
        self._cancellation = cancellation or CancellationScope("attendance workflow")
        self._scope: Optional[AcademicScope] = None
        self._user: Optional[AuthenticatedUser] = None
        self._records: Tuple[AttendanceRecord, ...] = ()
        self._not_marked = False
        self._no_data = False

    def __enter__(self) -> "AttendanceWorkflow":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self._cancellation.cancel()

    @property
    def scope(self) -> Optional[AcademicScope]:
        return self._scope

    @property
    def records(self) -> Tuple[AttendanceRecord, ...]:
        return self._records

    @property
    def not_marked(self) -> bool:
        """True once any student on this screen was default-filled."""
        return self._not_marked

    @property
    def no_data(self) -> bool:
        return self._no_data

    @property
    def save_label(self) -> str:
        return SAVE_ATTENDANCE_LABEL if self._not_marked else UPDATE_ATTENDANCE_LABEL

    @property
    def marked_by(self) -> str:
        return (self._user.email if self._user else None) or SYSTEM_MARKER

    def load(self) -> Tuple[AttendanceRecord, ...]:
        self._user = self._session.require_user()
        self._scope = self._session.require_academic_scope()

        try:
            fetched = self._attendance.fetch_roster(self._scope)
        except ApplicationError:
            self._cancellation.check()
            self._no_data = True
            self._records = ()
            raise
        self._cancellation.check()

        records, defaulted = default_fill(sort_by_name(fetched))
        self._records = records
        self._no_data = False
        self._not_marked = self._not_marked or defaulted
        logger.info(
            "Loaded %d students for %s/%s on %s (defaulted=%s)",
            len(records), self._scope.class_id, self._scope.section, self._scope.date, defaulted,
        )
        return records

    def mark(self, student_id: str, status: Union[AttendanceStatus, str]) -> AttendanceRecord:
        if self._scope is None:
            raise ValidationError("Attendance data is not loaded")
        if not isinstance(status, AttendanceStatus):
            status = AttendanceStatus.from_label(status)

        updated: Optional[AttendanceRecord] = None
        out = []
        for record in self._records:
            if record.student_id == student_id:
                record = replace(
                    record,
                    status=status,
                    session_id=self._scope.session_id,
                    class_id=self._scope.class_id,
                    section=self._scope.section,
                    class_date=self._scope.date,
                    marked_by=self.marked_by,
                )
                updated = record
            out.append(record)

        if updated is None:
            raise ValidationError(f"Student {student_id} is not on this roster")
        self._records = tuple(out)
        return updated

    def _payload(self) -> Tuple[AttendanceRecord, ...]:
        scope = self._scope
        assert scope is not None
        return tuple(
            replace(
                r,
                session_id=r.session_id or scope.session_id,
                class_id=r.class_id or scope.class_id,
                section=r.section or scope.section,
                class_date=r.class_date or scope.date,
                marked_by=r.marked_by or self.marked_by,
            )
            for r in self._records
        )

    def save(self) -> Notice:
        if self._scope is None or not self._records:
            raise ValidationError("There is no attendance to save")
        if any(not r.is_marked for r in self._records):
            raise ValidationError("Please fill the attendance")

        try:
            self._attendance.save_roster(self._payload())
        except GatewayError as e:
            self._cancellation.check()
            logger.warning("Saving attendance failed: %s", e.message)
            raise type(e)("Failed to Save Attendance", title="Error") from e
        self._cancellation.check()

        logger.info("Saved attendance for %d students", len(self._records))
        return Notice("Attendance Saved!", "Your attendance has been successfully updated.")
