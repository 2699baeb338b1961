from __future__ import annotations

from typing import Any, Dict, Sequence

from ..core.constants import ENDPOINT_SESSIONS, ENDPOINT_TEACHER_CLASSES
from ..core.exceptions import TransportError
from ..gateway.client import RemoteGateway
from .model import SessionOption, TeacherClass
from .repository import AcademicRepository


def session_from_wire(r: Dict[str, Any]) -> SessionOption:
    try:
        return SessionOption(session_id=str(r["sessionId"]), is_active=int(r.get("isActive") or 0) == 1)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise TransportError("Invalid response from server") from e


def teacher_class_from_wire(r: Dict[str, Any], *, teacher_id: str, session_id: str) -> TeacherClass:
    try:
        return TeacherClass(
            session_id=str(r.get("sessionId") or session_id),
            class_id=str(r["classId"]),
            section=str(r["section"]),
            subject_id=str(r.get("subjectId") or ""),
            teacher_id=str(r.get("tId") or teacher_id),
        )
    except (AttributeError, KeyError, ValueError) as e:
        raise TransportError("Invalid response from server") from e


class HttpAcademicRepository(AcademicRepository):
    def __init__(self, gateway: RemoteGateway):
        self._gateway = gateway

    def list_sessions(self) -> Sequence[SessionOption]:
        data = self._gateway.get(ENDPOINT_SESSIONS)
        return [session_from_wire(r) for r in data.get("sessionsData") or []]

    def list_teacher_classes(self, *, teacher_id: str, session_id: str) -> Sequence[TeacherClass]:
        data = self._gateway.post(ENDPOINT_TEACHER_CLASSES, {"tId": teacher_id, "sessionId": session_id})
        return [
            teacher_class_from_wire(r, teacher_id=teacher_id, session_id=session_id)
            for r in data.get("tClassesData") or []
        ]
