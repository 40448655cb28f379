# printing/formatting.py

"""
RECEIPT NUMBER / DATE FORMATTING (id-ID)

- Thousands are grouped with "." and decimals use ",".
- At most three fraction digits are printed; trailing zeros are dropped.
- Timestamps render as "dd/mm/yyyy, HH.MM.SS" in the configured local time.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

from django.utils import timezone

MAX_FRACTION = Decimal("0.001")


def format_number(value) -> str:
    amount = Decimal(str(value)).quantize(MAX_FRACTION, rounding=ROUND_HALF_UP)

    sign = "-" if amount < 0 else ""
    whole, _, fraction = f"{abs(amount):.3f}".partition(".")

    grouped = f"{int(whole):,}".replace(",", ".")
    fraction = fraction.rstrip("0")

    if fraction:
        return f"{sign}{grouped},{fraction}"
    return f"{sign}{grouped}"


def format_timestamp(value: datetime) -> str:
    if timezone.is_aware(value):
        value = timezone.localtime(value)
    return value.strftime("%d/%m/%Y, %H.%M.%S")
