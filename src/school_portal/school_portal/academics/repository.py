from __future__ import annotations

from typing import Protocol, Sequence

from .model import SessionOption, TeacherClass


class AcademicRepository(Protocol):
    def list_sessions(self) -> Sequence[SessionOption]:
        raise NotImplementedError

    def list_teacher_classes(self, *, teacher_id: str, session_id: str) -> Sequence[TeacherClass]:
        raise NotImplementedError
