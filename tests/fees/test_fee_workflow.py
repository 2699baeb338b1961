from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.school_portal.school_portal.core.enums import AmountCheck, PaymentMethod, PaymentStage, SubmissionStatus, UserType
from src.school_portal.school_portal.core.exceptions import (
    ApplicationError,
    ExceedsPendingError,
    MissingTransactionIdError,
    NotAuthenticatedError,
    PaymentAppUnavailableError,
    PaymentGatedError,
    TransportError,
    ValidationError,
)
from src.school_portal.school_portal.fees.export.qr_export import DownloadQrExporter
from src.school_portal.school_portal.fees.factory import PaymentStrategyFactory
from src.school_portal.school_portal.fees.model import FeeSummary, PaymentRecord, PaymentSubmission
from src.school_portal.school_portal.fees.service import FeePaymentWorkflow
from src.school_portal.school_portal.fees.upi import UpiPayee
from src.school_portal.school_portal.session.model import AuthenticatedUser
from src.school_portal.school_portal.session.store import SessionStore
from src.school_portal.school_portal.storage.memory_storage import InMemoryStorage


def _submission(status: SubmissionStatus, amount="1000") -> PaymentSubmission:
    return PaymentSubmission(amount=Decimal(amount), transaction_id="T-OLD", payment_date="2026-01-05", status=status)


class InMemoryFees:
    """Backend double: a created submission shows up as Pending on the next fetch."""

    def __init__(self, *, fee=None, payments=(), submissions=(), errors=None, create_error=None):
        self.fee = fee if fee is not None else FeeSummary(Decimal("12000"), Decimal("2000"), Decimal("5000"))
        self.payments = list(payments)
        self.submissions = list(submissions)
        self.errors = dict(errors or {})
        self.create_error = create_error
        self.created = []
        self.fetch_count = 0

    def _maybe_fail(self, name):
        if name in self.errors:
            raise self.errors[name]

    def fetch_fee_summary(self, student):
        self.fetch_count += 1
        self._maybe_fail("fee")
        return self.fee

    def fetch_payment_history(self, student):
        self._maybe_fail("payments")
        return list(self.payments)

    def fetch_submissions(self, student):
        self._maybe_fail("submissions")
        return list(self.submissions)

    def create_submission(self, submission):
        if self.create_error:
            raise self.create_error
        self.created.append(submission)
        self.submissions.append(
            PaymentSubmission(
                amount=submission.amount,
                transaction_id=submission.transaction_id,
                payment_date=submission.payment_date,
                status=SubmissionStatus.PENDING,
                payment_mode=submission.payment_mode.value,
            )
        )


class RecordingLauncher:
    def __init__(self, result=True):
        self.result = result
        self.opened = []

    def open(self, url):
        self.opened.append(url)
        return self.result


def _student_session() -> SessionStore:
    store = SessionStore(InMemoryStorage())
    store.save_login(
        "tok",
        AuthenticatedUser(UserType.STUDENT, "S7", "Riya", session_id="2025-26", class_id="10", section="A"),
    )
    return store


def _workflow(fees, tmp_path, launcher=None) -> FeePaymentWorkflow:
    strategies = PaymentStrategyFactory(
        payee=UpiPayee(vpa="school.fees@upi", name="School"),
        exporter=DownloadQrExporter(tmp_path),
        launcher=launcher or RecordingLauncher(),
    )
    return FeePaymentWorkflow(fees, _student_session(), strategies)


def test_load_aggregates_all_sections(tmp_path):
    fees = InMemoryFees(
        payments=[
            PaymentRecord("2025-26", "S7", "10", "A", Decimal("3000"), "2025-07-01", "Cash"),
            PaymentRecord("2025-26", "S7", "10", "A", Decimal("2000"), "2025-09-01", "UPI"),
        ],
        submissions=[_submission(SubmissionStatus.VERIFIED)],
    )
    wf = _workflow(fees, tmp_path)

    overview = wf.load()

    assert overview.pending == Decimal("5000")
    assert overview.total_paid == Decimal("5000")
    assert overview.failed_sections == ()
    assert wf.is_pending is False
    assert wf.can_initiate_payment() is True


def test_pending_submission_gates_payment(tmp_path):
    fees = InMemoryFees(submissions=[_submission(SubmissionStatus.REJECTED), _submission(SubmissionStatus.PENDING)])
    wf = _workflow(fees, tmp_path)
    wf.load()

    assert wf.is_pending is True
    assert wf.can_initiate_payment() is False
    assert wf.can_pay_now is False
    with pytest.raises(PaymentGatedError):
        wf.select_method(PaymentMethod.QR)
    with pytest.raises(PaymentGatedError):
        wf.open_payment()


def test_gate_closed_before_load_and_when_submissions_unknown(tmp_path):
    fees = InMemoryFees(errors={"submissions": ApplicationError("down")})
    wf = _workflow(fees, tmp_path)
    assert wf.can_initiate_payment() is False

    overview = wf.load()

    assert overview.failed_sections == ("submissions",)
    assert wf.can_initiate_payment() is False


def test_failed_fee_section_is_recorded(tmp_path):
    fees = InMemoryFees(errors={"fee": ApplicationError("no fee")})
    wf = _workflow(fees, tmp_path)
    overview = wf.load()

    assert overview.fee is None
    assert overview.failed_sections == ("fee",)
    wf.select_method(PaymentMethod.QR)
    with pytest.raises(ValidationError):
        wf.open_payment()


def test_transport_error_aborts_load(tmp_path):
    wf = _workflow(InMemoryFees(errors={"payments": TransportError()}), tmp_path)
    with pytest.raises(TransportError):
        wf.load()
    assert wf.overview is None


def test_load_requires_login(tmp_path):
    strategies = PaymentStrategyFactory(UpiPayee("v@upi", "S"), DownloadQrExporter(tmp_path), RecordingLauncher())
    wf = FeePaymentWorkflow(InMemoryFees(), SessionStore(InMemoryStorage()), strategies)
    with pytest.raises(NotAuthenticatedError):
        wf.load()


def test_negative_pending_is_kept(tmp_path):
    fees = InMemoryFees(fee=FeeSummary(Decimal("10000"), Decimal("0"), Decimal("10500")))
    overview = _workflow(fees, tmp_path).load()
    assert overview.pending == Decimal("-500")
    assert overview.fee.is_overpaid is True


def test_amount_over_pending_hides_intent(tmp_path):
    wf = _workflow(InMemoryFees(), tmp_path)
    wf.load()
    wf.select_method(PaymentMethod.QR)
    modal = wf.open_payment()

    assert modal.enter_amount("6000") == AmountCheck.EXCEEDS_PENDING
    assert modal.error == "Amount cannot exceed pending amount"
    assert modal.intent is None
    assert modal.shows_qr is False
    assert modal.stage == PaymentStage.AMOUNT_ENTRY
    with pytest.raises(ExceedsPendingError):
        modal.mark_paid()


def test_qr_payment_through_submission(tmp_path):
    fees = InMemoryFees()
    wf = _workflow(fees, tmp_path)
    wf.load()
    wf.select_method("QR")
    assert wf.can_pay_now is True
    modal = wf.open_payment()

    modal.enter_amount("3000")
    assert modal.error == ""
    assert modal.stage == PaymentStage.INTENT_SHOWN
    assert modal.shows_qr is True
    assert "am=3000" in modal.intent.uri
    assert wf.share_qr() == tmp_path / "upi_qr.png"

    modal.mark_paid()
    assert modal.stage == PaymentStage.MARKED_PAID
    assert modal.awaiting_transaction_id is True
    with pytest.raises(ValidationError):
        modal.enter_amount("100")

    with pytest.raises(MissingTransactionIdError):
        wf.submit_payment(today=date(2026, 2, 10))
    assert wf.modal is modal
    assert modal.error == "Transaction ID is required"

    modal.enter_transaction_id("UTR123456")
    assert modal.stage == PaymentStage.TRANSACTION_ENTRY

    notice = wf.submit_payment(today=date(2026, 2, 10))

    assert notice.title == "Payment submitted"
    assert modal.stage == PaymentStage.SUBMITTED
    assert wf.modal is None
    created = fees.created[0]
    assert (created.amount, created.transaction_id, created.payment_date) == (Decimal("3000"), "UTR123456", "2026-02-10")
    assert created.payment_mode == PaymentMethod.QR
    assert created.student.student_id == "S7"
    # re-fetched rather than patched locally
    assert fees.fetch_count == 2
    assert wf.is_pending is True
    assert wf.can_initiate_payment() is False
    assert wf.selected_method is None


def test_reload_failure_after_submission_keeps_gate_closed(tmp_path):
    fees = InMemoryFees()
    wf = _workflow(fees, tmp_path)
    wf.load()
    wf.select_method(PaymentMethod.UPI)
    modal = wf.open_payment()
    modal.enter_amount("1500")
    modal.mark_paid()
    modal.enter_transaction_id("UTR77")
    fees.errors["payments"] = TransportError()

    notice = wf.submit_payment(today=date(2026, 2, 10))

    assert notice.title == "Payment submitted"
    assert len(fees.created) == 1
    assert wf.modal is None
    assert wf.overview is None
    assert wf.can_initiate_payment() is False
    with pytest.raises(PaymentGatedError):
        wf.select_method(PaymentMethod.UPI)

    fees.errors.clear()
    wf.load()

    assert wf.is_pending is True
    assert wf.can_initiate_payment() is False
    with pytest.raises(PaymentGatedError):
        wf.open_payment()
    assert len(fees.created) == 1


def test_failed_submission_keeps_modal_open(tmp_path):
    fees = InMemoryFees(create_error=ApplicationError("Duplicate transaction id"))
    wf = _workflow(fees, tmp_path)
    wf.load()
    wf.select_method(PaymentMethod.QR)
    modal = wf.open_payment()
    modal.enter_amount("100")
    modal.mark_paid()
    modal.enter_transaction_id("UTR1")

    with pytest.raises(ApplicationError) as exc:
        wf.submit_payment()

    assert exc.value.message == "Duplicate transaction id"
    assert wf.modal is modal
    assert modal.stage == PaymentStage.TRANSACTION_ENTRY
    assert fees.fetch_count == 1


def test_upi_app_missing_is_not_a_state_change(tmp_path):
    launcher = RecordingLauncher(result=False)
    wf = _workflow(InMemoryFees(), tmp_path, launcher=launcher)
    wf.load()
    wf.select_method(PaymentMethod.UPI)
    modal = wf.open_payment()
    modal.enter_amount("250")
    assert modal.shows_upi_button is True

    with pytest.raises(PaymentAppUnavailableError):
        wf.open_upi_app()

    assert modal.stage == PaymentStage.INTENT_SHOWN
    assert launcher.opened[0].endswith("am=250.00&cu=INR&mode=02")


def test_open_payment_requires_method(tmp_path):
    wf = _workflow(InMemoryFees(), tmp_path)
    wf.load()
    with pytest.raises(ValidationError):
        wf.open_payment()
