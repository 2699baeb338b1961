from __future__ import annotations

from enum import Enum


class UserType(str, Enum):
    """Portal the identity logged into."""

    STUDENT = "student"
    TEACHER = "teacher"


class AttendanceStatus(str, Enum):
    """Attendance mark as exchanged with the backend (`att` field)."""

    PRESENT = "P"
    ABSENT = "A"
    LEAVE = "L"

    @property
    def label(self) -> str:
        return {
            AttendanceStatus.PRESENT: "Present",
            AttendanceStatus.ABSENT: "Absent",
            AttendanceStatus.LEAVE: "Leave",
        }[self]

    @classmethod
    def from_label(cls, label: str) -> "AttendanceStatus":
        for status in cls:
            if status.label == label or status.value == label:
                return status
        raise ValueError(f"Unknown attendance status: {label!r}")


class ScopeStage(str, Enum):
    """Progress of academic scope selection."""

    EMPTY = "EMPTY"
    SESSION_CHOSEN = "SESSION_CHOSEN"
    CLASS_CHOSEN = "CLASS_CHOSEN"
    SECTION_CHOSEN = "SECTION_CHOSEN"
    READY = "READY"


class SubmissionStatus(str, Enum):
    """Verification state of a fee payment submission (set by the school office)."""

    PENDING = "Pending"
    REJECTED = "Rejected"
    VERIFIED = "Verified"


class PaymentMethod(str, Enum):
    QR = "QR"
    UPI = "UPI"


class PaymentStage(str, Enum):
    """Steps of the pay-now modal."""

    AMOUNT_ENTRY = "AMOUNT_ENTRY"
    INTENT_SHOWN = "INTENT_SHOWN"
    MARKED_PAID = "MARKED_PAID"
    TRANSACTION_ENTRY = "TRANSACTION_ENTRY"
    SUBMITTED = "SUBMITTED"


class AmountCheck(str, Enum):
    """Outcome of validating a typed payment amount."""

    VALID = "VALID"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    EXCEEDS_PENDING = "EXCEEDS_PENDING"

    @property
    def message(self) -> str:
        return {
            AmountCheck.VALID: "",
            AmountCheck.INVALID_AMOUNT: "Enter a valid amount",
            AmountCheck.EXCEEDS_PENDING: "Amount cannot exceed pending amount",
        }[self]


class Platform(str, Enum):
    """Runtime flavour; picks the storage and QR export adapters."""

    WEB = "web"
    NATIVE = "native"
