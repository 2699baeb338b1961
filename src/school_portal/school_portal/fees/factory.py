from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PaymentMethod
from .export.launcher import UrlLauncher
from .export.qr_export import QrImageExporter
from .strategies.base import PaymentIntentStrategy
from .strategies.qr_strategy import QrStrategy
from .strategies.upi_strategy import UpiAppStrategy
from .upi import UpiPayee


@dataclass
class PaymentStrategyFactory:
    """Factory Pattern: choose the intent strategy for the selected method."""

    payee: UpiPayee
    exporter: QrImageExporter
    launcher: UrlLauncher

    def for_method(self, method: PaymentMethod) -> PaymentIntentStrategy:
        if method == PaymentMethod.QR:
            return QrStrategy(self.payee, self.exporter)
        return UpiAppStrategy(self.payee, self.launcher)
