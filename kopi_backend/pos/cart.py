# pos/cart.py

"""
POS CART

In-memory cart of one operator.

Rules:
- One line per product; adding an existing product increments it by one.
- Quantity never drops below 1 through adjust_quantity(); removing a
  line is an explicit remove_item().
- unit_price is snapshotted when the product is first added.
- Every operation is total: unknown product ids are ignored.
- Persistence lives in pos.cart_store; this module has no database access.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterator, List

from products.money import to_money


@dataclass
class CartLine:
    product_id: str
    name: str
    unit_price: Decimal
    quantity: int = 1

    @property
    def line_total(self) -> Decimal:
        return to_money(self.unit_price * self.quantity)

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "unit_price": str(to_money(self.unit_price)),
            "quantity": self.quantity,
            "line_total": str(self.line_total),
        }


class Cart:
    """
    cart_id is the primary key of the stored PosCart this cart was loaded
    from (None for a cart that only lives in memory).
    """

    def __init__(self, lines: List[CartLine] | None = None, cart_id=None):
        self.cart_id = cart_id
        self._lines: Dict[str, CartLine] = {}
        for line in lines or []:
            self._lines[line.product_id] = line

    def __iter__(self) -> Iterator[CartLine]:
        return iter(list(self._lines.values()))

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    def get(self, product_id) -> CartLine | None:
        return self._lines.get(str(product_id))

    # --------------------------------------------------
    # Mutations
    # --------------------------------------------------

    def add_item(self, product) -> CartLine:
        """Add one unit of `product` (anything exposing id, name and unit_price)."""
        key = str(product.id)
        line = self._lines.get(key)
        if line is not None:
            line.quantity += 1
            return line

        line = CartLine(
            product_id=key,
            name=product.name,
            unit_price=to_money(product.unit_price),
            quantity=1,
        )
        self._lines[key] = line
        return line

    def remove_item(self, product_id) -> None:
        self._lines.pop(str(product_id), None)

    def adjust_quantity(self, product_id, delta: int) -> None:
        line = self._lines.get(str(product_id))
        if line is None:
            return
        line.quantity = max(1, line.quantity + int(delta))

    def clear(self) -> None:
        self._lines.clear()

    # --------------------------------------------------
    # Reads
    # --------------------------------------------------

    def total(self) -> Decimal:
        return to_money(sum((line.line_total for line in self._lines.values()), Decimal("0.00")))

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    # --------------------------------------------------
    # Serialisation
    # --------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "items": [line.to_dict() for line in self._lines.values()],
            "item_count": self.item_count,
            "total": str(self.total()),
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "Cart":
        lines = []
        for raw in (data or {}).get("items", []):
            lines.append(
                CartLine(
                    product_id=str(raw["product_id"]),
                    name=raw["name"],
                    unit_price=to_money(raw["unit_price"]),
                    quantity=max(1, int(raw.get("quantity") or 1)),
                )
            )
        return cls(lines)
