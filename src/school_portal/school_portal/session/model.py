from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..core.enums import UserType


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity blob saved under ``user_data`` at login.

    Teachers are keyed by ``tId``; students by ``sId`` and carry their
    enrolment (session, class, section).
    """

    user_type: UserType
    user_id: str
    name: str
    email: Optional[str] = None
    session_id: Optional[str] = None
    class_id: Optional[str] = None
    section: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def is_teacher(self) -> bool:
        return self.user_type == UserType.TEACHER

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthenticatedUser":
        if data.get("tId"):
            user_type = UserType.TEACHER
            user_id = str(data["tId"])
        else:
            user_type = UserType.STUDENT
            user_id = str(data.get("sId", ""))

        known = {"tId", "sId", "name", "emailId", "session", "class", "section", "userType"}
        return cls(
            user_type=UserType(data.get("userType", user_type.value)),
            user_id=user_id,
            name=str(data.get("name", "")),
            email=data.get("emailId") or None,
            session_id=data.get("session") or None,
            class_id=data.get("class") or None,
            section=data.get("section") or None,
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.extra)
        data["userType"] = self.user_type.value
        data["tId" if self.is_teacher else "sId"] = self.user_id
        data["name"] = self.name
        if self.email:
            data["emailId"] = self.email
        if self.session_id:
            data["session"] = self.session_id
        if self.class_id:
            data["class"] = self.class_id
        if self.section:
            data["section"] = self.section
        return data
