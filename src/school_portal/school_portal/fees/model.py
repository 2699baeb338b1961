from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple

from ..core.enums import PaymentMethod, SubmissionStatus
from ..session.model import AuthenticatedUser


@dataclass(frozen=True)
class StudentRef:
    """Enrolment keys every fee endpoint is queried with."""

    session_id: str
    student_id: str
    class_id: str
    section: str

    @classmethod
    def from_user(cls, user: AuthenticatedUser) -> "StudentRef":
        return cls(
            session_id=user.session_id or "",
            student_id=user.user_id,
            class_id=user.class_id or "",
            section=user.section or "",
        )


@dataclass(frozen=True)
class FeeSummary:
    total_fee: Decimal
    discount: Decimal
    paid_to_date: Decimal

    @property
    def pending(self) -> Decimal:
        # Not clamped: a negative value means the student has over-paid.
        return self.total_fee - self.discount - self.paid_to_date

    @property
    def is_overpaid(self) -> bool:
        return self.pending < 0


@dataclass(frozen=True)
class PaymentRecord:
    """A payment the school office has already booked."""

    session_id: str
    student_id: str
    class_id: str
    section: str
    amount: Decimal
    payment_date: str
    payment_mode: str
    remark: str = ""
    student_name: str = ""


@dataclass(frozen=True)
class PaymentSubmission:
    """A student's claim of payment awaiting or past office verification."""

    amount: Decimal
    transaction_id: str
    payment_date: str
    status: SubmissionStatus
    payment_mode: str = ""
    session_id: str = ""
    student_id: str = ""
    class_id: str = ""
    section: str = ""

    @property
    def is_pending(self) -> bool:
        return self.status == SubmissionStatus.PENDING


@dataclass(frozen=True)
class NewPaymentSubmission:
    student: StudentRef
    amount: Decimal
    payment_mode: PaymentMethod
    payment_date: str
    transaction_id: str


@dataclass(frozen=True)
class FeeOverview:
    """Everything the pay-fee screen shows after aggregation."""

    fee: Optional[FeeSummary] = None
    payments: Tuple[PaymentRecord, ...] = ()
    submissions: Tuple[PaymentSubmission, ...] = ()
    failed_sections: Tuple[str, ...] = field(default=())

    @property
    def pending(self) -> Optional[Decimal]:
        return self.fee.pending if self.fee else None

    @property
    def total_paid(self) -> Decimal:
        return sum((p.amount for p in self.payments), Decimal("0"))

    @property
    def submissions_loaded(self) -> bool:
        return "submissions" not in self.failed_sections

    @property
    def is_pending(self) -> bool:
        return any(s.is_pending for s in self.submissions)


@dataclass(frozen=True)
class PaymentIntent:
    method: PaymentMethod
    uri: str
    amount: Decimal
