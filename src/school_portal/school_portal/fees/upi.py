from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import qrcode

from ..core.constants import DEFAULT_CURRENCY, DEFAULT_PAYMENT_NOTE

# Characters encodeURI() leaves alone; the deep link keeps its ?, & and = intact.
_URI_SAFE = ";,/?:@&=+$-_.!~*'()#"


@dataclass(frozen=True)
class UpiPayee:
    vpa: str
    name: str
    note: str = DEFAULT_PAYMENT_NOTE
    currency: str = DEFAULT_CURRENCY


def build_upi_uri(payee: UpiPayee, amount: str, *, mode: Optional[str] = None) -> str:
    uri = f"upi://pay?pa={payee.vpa}&pn={payee.name}&tn={payee.note}&am={amount}&cu={payee.currency}"
    if mode:
        uri += f"&mode={mode}"
    return quote(uri, safe=_URI_SAFE)


def render_qr_png(data: str, *, box_size: int = 10, border: int = 2) -> bytes:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
