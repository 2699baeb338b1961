from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any

from ...core.enums import PaymentMethod
from ..model import PaymentIntent
from ..upi import UpiPayee


class PaymentIntentStrategy(ABC):
    """Strategy Pattern: how a validated amount becomes something the payer acts on."""

    method: PaymentMethod

    def __init__(self, payee: UpiPayee):
        self._payee = payee

    @abstractmethod
    def build_intent(self, *, amount: Decimal, amount_text: str) -> PaymentIntent:
        raise NotImplementedError

    @abstractmethod
    def activate(self, intent: PaymentIntent) -> Any:
        """Run the intent's side effect (share the code, open the UPI app)."""

        raise NotImplementedError
