from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict

from ..core.enums import ScopeStage


@dataclass(frozen=True)
class AcademicScope:
    """The (session, class, section, date) tuple that bounds an attendance run.

    ``date`` is kept as the ISO ``YYYY-MM-DD`` string the backend expects.
    """

    session_id: str = ""
    class_id: str = ""
    section: str = ""
    date: str = ""

    def with_session(self, session_id: str) -> "AcademicScope":
        return replace(self, session_id=session_id, class_id="", section="")

    def with_class(self, class_id: str) -> "AcademicScope":
        return replace(self, class_id=class_id, section="")

    def with_section(self, section: str) -> "AcademicScope":
        return replace(self, section=section)

    def with_date(self, value: str) -> "AcademicScope":
        return replace(self, date=value)

    @property
    def stage(self) -> ScopeStage:
        if not self.session_id:
            return ScopeStage.EMPTY
        if not self.class_id:
            return ScopeStage.SESSION_CHOSEN
        if not self.section:
            return ScopeStage.CLASS_CHOSEN
        if not self.date:
            return ScopeStage.SECTION_CHOSEN
        return ScopeStage.READY

    def to_dict(self) -> Dict[str, str]:
        return {
            "sessionId": self.session_id,
            "studentClass": self.class_id,
            "section": self.section,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AcademicScope":
        return cls(
            session_id=str(data.get("sessionId") or ""),
            class_id=str(data.get("studentClass") or data.get("classId") or ""),
            section=str(data.get("section") or ""),
            date=str(data.get("date") or ""),
        )


@dataclass(frozen=True)
class SessionOption:
    session_id: str
    is_active: bool = False


@dataclass(frozen=True)
class TeacherClass:
    """One class/section allotment of a teacher within a session."""

    session_id: str
    class_id: str
    section: str
    subject_id: str = ""
    teacher_id: str = ""
