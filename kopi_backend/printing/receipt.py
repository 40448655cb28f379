# printing/receipt.py

"""
RECEIPT DATA (checkout -> printer contract)

Immutable snapshot of a completed sale, in the shape the receipt encoder
consumes.

Rules:
- subtotal is the sum of item subtotals.
- total == subtotal - discount.amount (no discount -> total == subtotal).
- Use ReceiptData.build() to have both computed; direct construction is
  validated against the same rules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from products.money import to_money


@dataclass(frozen=True)
class ReceiptItem:
    name: str
    qty: int
    price: Decimal
    subtotal: Decimal

    @classmethod
    def of(cls, *, name: str, qty: int, price) -> "ReceiptItem":
        unit = to_money(price)
        return cls(name=name, qty=int(qty), price=unit, subtotal=to_money(unit * int(qty)))


@dataclass(frozen=True)
class Discount:
    name: str
    amount: Decimal


@dataclass(frozen=True)
class ReceiptData:
    transaction_id: str
    timestamp: datetime
    items: Tuple[ReceiptItem, ...]
    subtotal: Decimal
    total: Decimal
    payment_method: str
    discount: Optional[Discount] = None
    employee_name: Optional[str] = field(default=None)

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

        expected_subtotal = to_money(sum((i.subtotal for i in self.items), Decimal("0.00")))
        if to_money(self.subtotal) != expected_subtotal:
            raise ValueError(
                f"Receipt subtotal {self.subtotal} does not match item subtotals {expected_subtotal}"
            )

        discount_amount = self.discount.amount if self.discount else Decimal("0.00")
        expected_total = to_money(to_money(self.subtotal) - to_money(discount_amount))
        if to_money(self.total) != expected_total:
            raise ValueError(
                f"Receipt total {self.total} must equal subtotal - discount ({expected_total})"
            )

    @classmethod
    def build(
        cls,
        *,
        transaction_id: str,
        timestamp: datetime,
        items: Iterable[ReceiptItem],
        payment_method: str,
        employee_name: Optional[str] = None,
        discount: Optional[Discount] = None,
    ) -> "ReceiptData":
        items = tuple(items)
        subtotal = to_money(sum((i.subtotal for i in items), Decimal("0.00")))
        discount_amount = discount.amount if discount else Decimal("0.00")

        return cls(
            transaction_id=transaction_id,
            timestamp=timestamp,
            items=items,
            subtotal=subtotal,
            total=to_money(subtotal - to_money(discount_amount)),
            payment_method=payment_method,
            discount=discount,
            employee_name=employee_name,
        )

    def to_dict(self) -> dict:
        return {
            "transaction_id": self.transaction_id,
            "timestamp": self.timestamp.isoformat(),
            "items": [
                {
                    "name": i.name,
                    "qty": i.qty,
                    "price": str(i.price),
                    "subtotal": str(i.subtotal),
                }
                for i in self.items
            ],
            "subtotal": str(to_money(self.subtotal)),
            "discount": (
                {"name": self.discount.name, "amount": str(to_money(self.discount.amount))}
                if self.discount
                else None
            ),
            "total": str(to_money(self.total)),
            "payment_method": self.payment_method,
            "employee_name": self.employee_name,
        }
