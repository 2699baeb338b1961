from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.validators import to_decimal
from ..core.constants import (
    ENDPOINT_FEE_SUMMARY,
    ENDPOINT_PAYMENT_HISTORY,
    ENDPOINT_SUBMISSION_CREATE,
    ENDPOINT_SUBMISSION_HISTORY,
    SUBMISSION_PAYMENT_MODE,
)
from ..core.enums import SubmissionStatus
from ..core.exceptions import TransportError
from ..gateway.client import RemoteGateway
from .model import FeeSummary, NewPaymentSubmission, PaymentRecord, PaymentSubmission, StudentRef
from .repository import FeeRepository


def _std_data(student: StudentRef) -> Dict[str, Any]:
    return {
        "sessionId": student.session_id,
        "classId": student.class_id,
        "section": student.section,
        "sId": student.student_id,
    }


def payment_from_wire(r: Dict[str, Any]) -> PaymentRecord:
    try:
        return PaymentRecord(
            session_id=str(r.get("sessionId") or ""),
            student_id=str(r.get("sId") or ""),
            class_id=str(r.get("classId") or ""),
            section=str(r.get("section") or ""),
            amount=to_decimal(r.get("amount")),
            payment_date=str(r.get("paymentDate") or ""),
            payment_mode=str(r.get("paymentMode") or ""),
            remark=str(r.get("remark") or ""),
            student_name=str(r.get("studentName") or ""),
        )
    except (AttributeError, KeyError, ValueError) as e:
        raise TransportError("Invalid response from server") from e


def submission_from_wire(r: Dict[str, Any]) -> PaymentSubmission:
    try:
        return PaymentSubmission(
            amount=to_decimal(r.get("amount")),
            transaction_id=str(r.get("transactionId") or ""),
            payment_date=str(r.get("paymentDate") or ""),
            status=SubmissionStatus(r.get("status") or SubmissionStatus.PENDING.value),
            payment_mode=str(r.get("paymentMode") or ""),
            session_id=str(r.get("sessionId") or ""),
            student_id=str(r.get("sId") or ""),
            class_id=str(r.get("classId") or ""),
            section=str(r.get("section") or ""),
        )
    except (AttributeError, KeyError, ValueError) as e:
        raise TransportError("Invalid response from server") from e


class HttpFeeRepository(FeeRepository):
    def __init__(self, gateway: RemoteGateway):
        self._gateway = gateway

    def fetch_fee_summary(self, student: StudentRef) -> Optional[FeeSummary]:
        data = self._gateway.post(ENDPOINT_FEE_SUMMARY, {"stdData": _std_data(student)})
        rows = data.get("feeData") or []
        if not rows:
            return None
        r = rows[0]
        if not isinstance(r, dict):
            raise TransportError("Invalid response from server")
        return FeeSummary(
            total_fee=to_decimal(r.get("fee")),
            discount=to_decimal(r.get("discount")),
            paid_to_date=to_decimal(r.get("paid")),
        )

    def fetch_payment_history(self, student: StudentRef) -> Sequence[PaymentRecord]:
        data = self._gateway.post(ENDPOINT_PAYMENT_HISTORY, {"stdData": _std_data(student)})
        return [payment_from_wire(r) for r in data.get("paymentsData") or []]

    def fetch_submissions(self, student: StudentRef) -> Sequence[PaymentSubmission]:
        data = self._gateway.post(ENDPOINT_SUBMISSION_HISTORY, _std_data(student))
        return [submission_from_wire(r) for r in data.get("paymentsData") or []]

    def create_submission(self, submission: NewPaymentSubmission) -> None:
        payment_data = _std_data(submission.student)
        payment_data.update(
            {
                "amount": str(submission.amount),
                "paymentMode": SUBMISSION_PAYMENT_MODE,
                "paymentDate": submission.payment_date,
                "transactionId": submission.transaction_id,
            }
        )
        self._gateway.post(ENDPOINT_SUBMISSION_CREATE, {"paymentData": payment_data})
