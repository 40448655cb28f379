# pos/models/cart_item.py

"""
POS CART ITEM MODEL

Rules:
- One line per product per cart (DB constraint).
- name and unit_price are snapshots taken when the product was first added.
- Lines are rewritten as a whole by pos.cart_store; position keeps cart order.
"""

import uuid
from decimal import Decimal

from django.db import models

from products.models import Product
from .cart import PosCart


class PosCartItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    cart = models.ForeignKey(
        PosCart,
        on_delete=models.CASCADE,
        related_name="items",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="cart_items",
    )

    name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Snapshot price at time of adding to cart (server-controlled)",
    )
    position = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["position", "created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["cart", "product"],
                name="unique_product_per_pos_cart",
            )
        ]

    @property
    def line_total(self) -> Decimal:
        return (self.unit_price or Decimal("0.00")) * int(self.quantity or 0)

    def __str__(self):
        return f"{self.name} x {self.quantity}"
