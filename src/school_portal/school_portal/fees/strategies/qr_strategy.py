from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from ...core.enums import PaymentMethod
from ..export.qr_export import QrImageExporter
from ..model import PaymentIntent
from ..upi import UpiPayee, build_upi_uri, render_qr_png
from .base import PaymentIntentStrategy


class QrStrategy(PaymentIntentStrategy):
    """Show a scannable code of the UPI link; the image can be downloaded or shared."""

    method = PaymentMethod.QR

    def __init__(self, payee: UpiPayee, exporter: QrImageExporter):
        super().__init__(payee)
        self._exporter = exporter

    def build_intent(self, *, amount: Decimal, amount_text: str) -> PaymentIntent:
        uri = build_upi_uri(self._payee, amount_text.strip())
        return PaymentIntent(method=self.method, uri=uri, amount=amount)

    def render(self, intent: PaymentIntent) -> bytes:
        return render_qr_png(intent.uri)

    def activate(self, intent: PaymentIntent) -> Path:
        return self._exporter.export(self.render(intent))
