# printing/receipt_encoder.py

"""
RECEIPT ENCODER

ReceiptData -> ESC/POS bytes.

Pure and deterministic: the same receipt (and header) always yields the
same byte sequence. Layout, top to bottom:

    shop name (centered, bold) + shop lines
    ---
    ID / Waktu
    ---
    per item: name, then "qty x price   subtotal"
    ---
    Subtotal, optional discount, TOTAL (bold)   [right aligned]
    Metode / Kasir
    ---
    footer lines (centered), feed, cut
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from django.conf import settings

from printing.escpos import EscPosEncoder
from printing.formatting import format_number, format_timestamp
from printing.receipt import ReceiptData


@dataclass(frozen=True)
class ReceiptHeader:
    shop_name: str = "EXAMPLE COFFE"
    shop_lines: Tuple[str, ...] = ("Cicalengka, Bandung", "Every moment feels lighter")
    footer_lines: Tuple[str, ...] = ("Terima kasih", "Selamat menikmati!")
    divider_width: int = 32
    codepage: str = "cp850"

    @property
    def divider(self) -> str:
        return "-" * self.divider_width

    @classmethod
    def from_settings(cls) -> "ReceiptHeader":
        conf = getattr(settings, "RECEIPT", {}) or {}
        default = cls()
        return cls(
            shop_name=conf.get("SHOP_NAME", default.shop_name),
            shop_lines=tuple(conf.get("SHOP_LINES", default.shop_lines)),
            footer_lines=tuple(conf.get("FOOTER_LINES", default.footer_lines)),
            divider_width=int(conf.get("DIVIDER_WIDTH", default.divider_width)),
            codepage=conf.get("CODEPAGE", default.codepage),
        )


def encode_receipt(receipt: ReceiptData, header: Optional[ReceiptHeader] = None) -> bytes:
    header = header or ReceiptHeader.from_settings()
    divider = header.divider

    encoder = (
        EscPosEncoder()
        .initialize()
        .codepage(header.codepage)
        .align("center")
        .bold(True)
        .line(header.shop_name)
        .bold(False)
    )

    for text in header.shop_lines:
        encoder.line(text)

    (
        encoder.line(divider)
        .align("left")
        .line(f"ID: {receipt.transaction_id}")
        .line(f"Waktu: {format_timestamp(receipt.timestamp)}")
        .line(divider)
    )

    for item in receipt.items:
        encoder.line(item.name)
        encoder.line(f"{item.qty} x {format_number(item.price)}   {format_number(item.subtotal)}")

    encoder.line(divider).align("right").line(f"Subtotal: Rp {format_number(receipt.subtotal)}")

    if receipt.discount and receipt.discount.amount > 0:
        encoder.line(f"Disc ({receipt.discount.name}): -{format_number(receipt.discount.amount)}")

    (
        encoder.bold(True)
        .line(f"TOTAL: Rp {format_number(receipt.total)}")
        .bold(False)
        .align("left")
        .line(f"Metode: {receipt.payment_method}")
        .line(f"Kasir: {receipt.employee_name or '-'}")
        .line(divider)
        .align("center")
    )

    for text in header.footer_lines:
        encoder.line(text)

    return encoder.newline().newline().newline().cut().encode()
