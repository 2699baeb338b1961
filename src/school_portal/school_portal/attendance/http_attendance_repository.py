from __future__ import annotations

from typing import Any, Dict, Sequence

from ..academics.model import AcademicScope
from ..core.constants import ENDPOINT_ROSTER, ENDPOINT_SAVE_ATTENDANCE, ENDPOINT_STUDENT_ATTENDANCE
from ..core.enums import AttendanceStatus
from ..core.exceptions import TransportError
from ..gateway.client import RemoteGateway
from .model import AttendanceRecord
from .repository import AttendanceRepository


def record_from_wire(r: Dict[str, Any]) -> AttendanceRecord:
    try:
        att = r.get("att")
        return AttendanceRecord(
            student_id=str(r["sId"]),
            student_name=str(r.get("studentName") or ""),
            session_id=str(r.get("sessionId") or ""),
            class_id=str(r.get("classId") or ""),
            section=str(r.get("section") or ""),
            class_date=str(r.get("classDate") or ""),
            status=AttendanceStatus(att) if att else None,
            marked_by=str(r.get("markedBy") or ""),
            teacher_name=str(r.get("teacherName") or ""),
        )
    except (AttributeError, KeyError, ValueError) as e:
        raise TransportError("Invalid response from server") from e


def record_to_wire(record: AttendanceRecord) -> Dict[str, Any]:
    return {
        "sId": record.student_id,
        "studentName": record.student_name,
        "teacherName": record.teacher_name,
        "sessionId": record.session_id,
        "classId": record.class_id,
        "section": record.section,
        "classDate": record.class_date,
        "att": record.status.value if record.status else None,
        "markedBy": record.marked_by,
    }


class HttpAttendanceRepository(AttendanceRepository):
    def __init__(self, gateway: RemoteGateway):
        self._gateway = gateway

    def fetch_roster(self, scope: AcademicScope) -> Sequence[AttendanceRecord]:
        data = self._gateway.post(
            ENDPOINT_ROSTER,
            {
                "sessionId": scope.session_id,
                "classId": scope.class_id,
                "section": scope.section,
                "date": scope.date,
            },
        )
        return [record_from_wire(r) for r in data.get("attData") or []]

    def save_roster(self, records: Sequence[AttendanceRecord]) -> None:
        self._gateway.post(ENDPOINT_SAVE_ATTENDANCE, {"attData": [record_to_wire(r) for r in records]})

    def fetch_student_history(self, *, session_id: str, student_id: str) -> Sequence[AttendanceRecord]:
        data = self._gateway.post(ENDPOINT_STUDENT_ATTENDANCE, {"sessionId": session_id, "sId": student_id})
        return [record_from_wire(r) for r in data.get("attData") or []]
