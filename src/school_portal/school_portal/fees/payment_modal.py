from __future__ import annotations

from decimal import Decimal
from typing import Optional, Tuple

from ..common.validators import parse_decimal
from ..core.enums import AmountCheck, PaymentMethod, PaymentStage
from ..core.exceptions import MissingTransactionIdError, ValidationError
from .model import PaymentIntent
from .strategies.base import PaymentIntentStrategy
from .validation import require_valid_amount, validate_amount


class PaymentModal:
    """Pay-now dialog.

    AmountEntry -> (QR shown | UPI button shown) -> MarkedPaid ->
    TransactionIdEntry -> Submitted. The amount is frozen once the payer says
    they have paid.
    """

    def __init__(self, strategy: PaymentIntentStrategy, pending: Decimal):
        self._strategy = strategy
        self._pending = pending
        self._amount_text = ""
        self._check: Optional[AmountCheck] = None
        self._error = ""
        self._marked_paid = False
        self._transaction_id = ""
        self._submitted = False

    @property
    def method(self) -> PaymentMethod:
        return self._strategy.method

    @property
    def strategy(self) -> PaymentIntentStrategy:
        return self._strategy

    @property
    def amount_text(self) -> str:
        return self._amount_text

    @property
    def error(self) -> str:
        return self._error

    @property
    def transaction_id(self) -> str:
        return self._transaction_id

    @property
    def stage(self) -> PaymentStage:
        if self._submitted:
            return PaymentStage.SUBMITTED
        if self._marked_paid:
            return PaymentStage.TRANSACTION_ENTRY if self._transaction_id.strip() else PaymentStage.MARKED_PAID
        if self._check == AmountCheck.VALID:
            return PaymentStage.INTENT_SHOWN
        return PaymentStage.AMOUNT_ENTRY

    @property
    def awaiting_transaction_id(self) -> bool:
        return self.stage in (PaymentStage.MARKED_PAID, PaymentStage.TRANSACTION_ENTRY)

    def enter_amount(self, text: str) -> AmountCheck:
        if self._marked_paid:
            raise ValidationError("Amount can no longer be changed")
        self._amount_text = text
        self._check = validate_amount(text, self._pending)
        self._error = self._check.message
        return self._check

    @property
    def intent(self) -> Optional[PaymentIntent]:
        """The QR link or UPI button, only while a valid amount is being paid."""
        if self.stage != PaymentStage.INTENT_SHOWN:
            return None
        amount = parse_decimal(self._amount_text)
        assert amount is not None
        return self._strategy.build_intent(amount=amount, amount_text=self._amount_text)

    @property
    def shows_qr(self) -> bool:
        return self.method == PaymentMethod.QR and self.intent is not None

    @property
    def shows_upi_button(self) -> bool:
        return self.method == PaymentMethod.UPI and self.intent is not None

    def mark_paid(self) -> None:
        if self._marked_paid:
            return
        try:
            require_valid_amount(self._amount_text, self._pending)
        except ValidationError as e:
            self._error = e.message
            raise
        self._marked_paid = True
        self._error = ""

    def enter_transaction_id(self, text: str) -> None:
        if not self._marked_paid:
            raise ValidationError("Confirm the payment before entering its transaction id")
        self._transaction_id = text
        if text.strip():
            self._error = ""

    def require_submission(self) -> Tuple[Decimal, str]:
        if not self._marked_paid:
            raise ValidationError("Confirm the payment before submitting it")
        txn = self._transaction_id.strip()
        if not txn:
            self._error = "Transaction ID is required"
            raise MissingTransactionIdError(self._error)
        amount = parse_decimal(self._amount_text)
        assert amount is not None
        return amount, txn

    def mark_submitted(self) -> None:
        self._submitted = True
