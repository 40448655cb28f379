# products/money.py

"""
Money helpers shared by pricing, cart, checkout and receipts.

All amounts are Decimal rupiah rounded to 2dp (ROUND_HALF_UP).
"""

from decimal import Decimal, ROUND_HALF_UP

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(v) -> Decimal:
    if v is None or v == "":
        return ZERO
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
