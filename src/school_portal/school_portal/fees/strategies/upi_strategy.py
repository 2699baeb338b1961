from __future__ import annotations

import logging
from decimal import Decimal

from ...core.constants import UPI_APP_MODE
from ...core.enums import PaymentMethod
from ...core.exceptions import PaymentAppUnavailableError
from ..export.launcher import UrlLauncher
from ..model import PaymentIntent
from ..upi import UpiPayee, build_upi_uri
from .base import PaymentIntentStrategy

logger = logging.getLogger(__name__)


class UpiAppStrategy(PaymentIntentStrategy):
    """Open the UPI link in whichever payment app claims it."""

    method = PaymentMethod.UPI

    def __init__(self, payee: UpiPayee, launcher: UrlLauncher):
        super().__init__(payee)
        self._launcher = launcher

    def build_intent(self, *, amount: Decimal, amount_text: str) -> PaymentIntent:
        uri = build_upi_uri(self._payee, f"{amount:.2f}", mode=UPI_APP_MODE)
        return PaymentIntent(method=self.method, uri=uri, amount=amount)

    def activate(self, intent: PaymentIntent) -> bool:
        if not self._launcher.open(intent.uri):
            logger.warning("No UPI app accepted the payment link")
            raise PaymentAppUnavailableError("Please install or enable a UPI app like GPay or PhonePe")
        return True
