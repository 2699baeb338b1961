from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import FeeSummary, NewPaymentSubmission, PaymentRecord, PaymentSubmission, StudentRef


class FeeRepository(Protocol):
    def fetch_fee_summary(self, student: StudentRef) -> Optional[FeeSummary]:
        raise NotImplementedError

    def fetch_payment_history(self, student: StudentRef) -> Sequence[PaymentRecord]:
        raise NotImplementedError

    def fetch_submissions(self, student: StudentRef) -> Sequence[PaymentSubmission]:
        raise NotImplementedError

    def create_submission(self, submission: NewPaymentSubmission) -> None:
        raise NotImplementedError
