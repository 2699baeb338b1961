from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional, Sequence, TypeVar, Union

from ..common.cancellation import CancellationScope
from ..common.datetime_utils import today_local
from ..core.enums import PaymentMethod
from ..core.exceptions import ApplicationError, GatewayError, PaymentGatedError, ValidationError
from ..core.notice import Notice
from ..session.store import SessionStore
from .factory import PaymentStrategyFactory
from .model import FeeOverview, NewPaymentSubmission, StudentRef
from .payment_modal import PaymentModal
from .repository import FeeRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FeePaymentWorkflow:
    """Student pay-fee screen.

    State only converges through ``load``: after a submission the workflow
    re-fetches instead of patching its local copy, which is what flips the
    pending gate.
    """

    def __init__(
        self,
        fees: FeeRepository,
        session: SessionStore,
        strategies: PaymentStrategyFactory,
        *,
        cancellation: Optional[CancellationScope] = None,
        tz_name: Optional[str] = None,
    ):
        self._fees = fees
        self._session = session
        self._strategies = strategies
        self._cancellation = cancellation or CancellationScope("fee payment workflow")
        self._tz_name = tz_name
        self._student: Optional[StudentRef] = None
        self._overview: Optional[FeeOverview] = None
        self._selected_method: Optional[PaymentMethod] = None
        self._modal: Optional[PaymentModal] = None

    def __enter__(self) -> "FeePaymentWorkflow":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self._cancellation.cancel()

    # -- aggregation ----------------------------------------------------------

    def _section(self, name: str, fetch: Callable[[], T], failed: List[str], default: T) -> T:
        try:
            result = fetch()
        except ApplicationError as e:
            self._cancellation.check()
            logger.warning("Could not load %s: %s", name, e.message)
            failed.append(name)
            return default
        self._cancellation.check()
        return result

    def load(self) -> FeeOverview:
        user = self._session.require_user()
        student = StudentRef.from_user(user)
        failed: List[str] = []

        payments: Sequence = self._section("payments", lambda: self._fees.fetch_payment_history(student), failed, ())
        fee = self._section("fee", lambda: self._fees.fetch_fee_summary(student), failed, None)
        submissions: Sequence = self._section("submissions", lambda: self._fees.fetch_submissions(student), failed, ())

        self._student = student
        self._overview = FeeOverview(
            fee=fee,
            payments=tuple(payments),
            submissions=tuple(submissions),
            failed_sections=tuple(failed),
        )
        if fee is not None and fee.is_overpaid:
            logger.info("Student %s has a negative pending balance (%s)", student.student_id, fee.pending)
        if not self.can_initiate_payment():
            self._selected_method = None
        return self._overview

    @property
    def overview(self) -> Optional[FeeOverview]:
        return self._overview

    @property
    def is_pending(self) -> bool:
        return bool(self._overview and self._overview.is_pending)

    def can_initiate_payment(self) -> bool:
        """Closed while a submission awaits verification or the history is unknown."""
        overview = self._overview
        if overview is None or not overview.submissions_loaded:
            return False
        return not overview.is_pending

    def _require_open_gate(self) -> None:
        if self.is_pending:
            raise PaymentGatedError("Wait for Pending approvals")
        if not self.can_initiate_payment():
            raise PaymentGatedError("Payment details are not available yet")

    # -- method selection and modal -------------------------------------------

    @property
    def selected_method(self) -> Optional[PaymentMethod]:
        return self._selected_method

    def select_method(self, method: Union[PaymentMethod, str]) -> PaymentMethod:
        self._require_open_gate()
        self._selected_method = PaymentMethod(method)
        return self._selected_method

    @property
    def can_pay_now(self) -> bool:
        return self._selected_method is not None and self.can_initiate_payment()

    @property
    def modal(self) -> Optional[PaymentModal]:
        return self._modal

    def open_payment(self) -> PaymentModal:
        self._require_open_gate()
        if self._selected_method is None:
            raise ValidationError("Select a payment method")
        assert self._overview is not None
        if self._overview.fee is None:
            raise ValidationError("Fee details are not available")

        strategy = self._strategies.for_method(self._selected_method)
        self._modal = PaymentModal(strategy, self._overview.fee.pending)
        return self._modal

    def close_payment(self) -> None:
        self._modal = None

    def _require_modal(self) -> PaymentModal:
        if self._modal is None:
            raise ValidationError("No payment in progress")
        return self._modal

    def share_qr(self) -> Path:
        modal = self._require_modal()
        intent = modal.intent
        if modal.method != PaymentMethod.QR or intent is None:
            raise ValidationError("No QR code to download")
        return modal.strategy.activate(intent)

    def open_upi_app(self) -> bool:
        modal = self._require_modal()
        intent = modal.intent
        if modal.method != PaymentMethod.UPI or intent is None:
            raise ValidationError("Enter a valid amount first")
        return modal.strategy.activate(intent)

    # -- submission ------------------------------------------------------------

    def submit_payment(self, *, today: Optional[date] = None) -> Notice:
        modal = self._require_modal()
        amount, txn = modal.require_submission()
        assert self._student is not None

        submission = NewPaymentSubmission(
            student=self._student,
            amount=amount,
            payment_mode=modal.method,
            payment_date=(today or today_local(self._tz_name)).isoformat(),
            transaction_id=txn,
        )
        try:
            self._fees.create_submission(submission)
        except GatewayError:
            self._cancellation.check()
            # modal stays open for a retry
            raise
        self._cancellation.check()

        modal.mark_submitted()
        self._modal = None
        logger.info("Payment of %s submitted for verification (txn %s)", amount, txn)
        try:
            self.load()
        except GatewayError as e:
            # the submission exists server-side; keep the gate shut until a reload succeeds
            logger.warning("Reload after payment submission failed: %s", e.message)
            self._overview = None
            self._selected_method = None
        return Notice("Payment submitted", "Awaiting admin verification")
