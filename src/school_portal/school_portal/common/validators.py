from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def parse_decimal(value: Any) -> Optional[Decimal]:
    """Parse user or server supplied numbers; None when not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


def to_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    number = parse_decimal(value)
    return default if number is None else number
