from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence, Union

from ..academics.model import AcademicScope, SessionOption, TeacherClass
from ..academics.repository import AcademicRepository
from ..common.datetime_utils import parse_iso_date, today_local
from ..core.constants import ATTENDANCE_BACKDATE_DAYS
from ..core.enums import ScopeStage
from ..core.exceptions import InvalidDateError, MissingFieldsError, ValidationError
from ..session.store import SessionStore

logger = logging.getLogger(__name__)


def validate_attendance_date(value: Union[str, date, datetime], *, today: date, backdate_days: int = ATTENDANCE_BACKDATE_DAYS) -> date:
    """Accept ``value`` iff ``today - backdate_days <= value <= today``."""
    if isinstance(value, datetime):
        day = value.date()
    elif isinstance(value, date):
        day = value
    else:
        try:
            day = parse_iso_date(str(value).strip())
        except ValueError:
            raise InvalidDateError("Date must be in YYYY-MM-DD format")

    if day > today:
        raise InvalidDateError("Attendance cannot be marked for future dates")
    if day < today - timedelta(days=backdate_days):
        raise InvalidDateError(f"Attendance cannot be marked for more than {backdate_days} past days")
    return day


class ScopeSelector:
    """State machine behind the teacher's "select class" screen.

    Empty -> SessionChosen -> ClassChosen -> SectionChosen -> ready. Choosing a
    session clears class and section; choosing a class clears section.
    """

    def __init__(
        self,
        session: SessionStore,
        academics: Optional[AcademicRepository] = None,
        *,
        today: Optional[date] = None,
        tz_name: Optional[str] = None,
        backdate_days: int = ATTENDANCE_BACKDATE_DAYS,
    ):
        self._session = session
        self._academics = academics
        self._today = today or today_local(tz_name)
        self._backdate_days = int(backdate_days)
        self._initial = AcademicScope(date=self._today.isoformat())
        self._scope = self._initial
        self._sessions: List[SessionOption] = []
        self._allotments: List[TeacherClass] = []

    @property
    def scope(self) -> AcademicScope:
        return self._scope

    @property
    def stage(self) -> ScopeStage:
        return self._scope.stage

    @property
    def sessions(self) -> Sequence[SessionOption]:
        return tuple(self._sessions)

    @property
    def classes(self) -> List[str]:
        seen: List[str] = []
        for allotment in self._allotments:
            if allotment.class_id not in seen:
                seen.append(allotment.class_id)
        return seen

    @property
    def sections(self) -> List[str]:
        if not self._scope.class_id:
            return []
        out: List[str] = []
        for allotment in self._allotments:
            if allotment.class_id == self._scope.class_id and allotment.section not in out:
                out.append(allotment.section)
        return out

    def load_options(self) -> None:
        """Fetch sessions and preselect the active one."""
        if self._academics is None:
            return
        self._sessions = list(self._academics.list_sessions())
        active = next((s for s in self._sessions if s.is_active), None)
        if active is not None:
            self.select_session(active.session_id)

    def _load_allotments(self) -> None:
        self._allotments = []
        if self._academics is None or not self._scope.session_id:
            return
        user = self._session.require_user()
        self._allotments = list(
            self._academics.list_teacher_classes(teacher_id=user.user_id, session_id=self._scope.session_id)
        )

    def select_session(self, session_id: str) -> AcademicScope:
        self._scope = self._scope.with_session(session_id)
        self._load_allotments()
        return self._scope

    def select_class(self, class_id: str) -> AcademicScope:
        if not self._scope.session_id:
            raise ValidationError("Select a session first")
        self._scope = self._scope.with_class(class_id)
        return self._scope

    def select_section(self, section: str) -> AcademicScope:
        if not self._scope.class_id:
            raise ValidationError("Select a class first")
        self._scope = self._scope.with_section(section)
        return self._scope

    def select_date(self, value: Union[str, date, datetime]) -> AcademicScope:
        if isinstance(value, datetime):
            value = value.date()
        text = value.isoformat() if isinstance(value, date) else str(value)
        self._scope = self._scope.with_date(text)
        return self._scope

    def clear(self) -> None:
        if self._scope == self._initial:
            raise ValidationError("Nothing to clear")
        self._scope = self._initial

    def validate(self) -> AcademicScope:
        scope = self._scope
        if scope.stage != ScopeStage.READY:
            raise MissingFieldsError("Please fill all fields")
        validate_attendance_date(scope.date, today=self._today, backdate_days=self._backdate_days)
        return scope

    def confirm(self) -> AcademicScope:
        """Validate and hand the scope to the marking screen through the session store."""
        scope = self.validate()
        self._session.save_academic_scope(scope)
        logger.info(
            "Attendance scope confirmed: session=%s class=%s section=%s date=%s",
            scope.session_id, scope.class_id, scope.section, scope.date,
        )
        return scope
