from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..common.validators import parse_decimal
from ..core.enums import AmountCheck
from ..core.exceptions import ExceedsPendingError, InvalidAmountError


def validate_amount(text: Optional[str], pending: Decimal) -> AmountCheck:
    """Classify a typed amount against the pending fee; cheap enough per keystroke."""
    amount = parse_decimal(text)
    if amount is None or amount <= 0:
        return AmountCheck.INVALID_AMOUNT
    if amount > pending:
        return AmountCheck.EXCEEDS_PENDING
    return AmountCheck.VALID


def require_valid_amount(text: Optional[str], pending: Decimal) -> Decimal:
    check = validate_amount(text, pending)
    if check == AmountCheck.INVALID_AMOUNT:
        raise InvalidAmountError(check.message)
    if check == AmountCheck.EXCEEDS_PENDING:
        raise ExceedsPendingError(check.message)
    amount = parse_decimal(text)
    assert amount is not None
    return amount
