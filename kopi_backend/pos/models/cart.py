"""
PATH: pos/models/cart.py

POS CART MODEL

Purpose:
- Stored POS cart of one operator (temporary, mutable).
- pos.cart_store converts it to and from the in-memory pos.cart.Cart.

Rules:
- One active cart per user (DB constraint).
- Closed (is_active=False) in the same transaction that saves its Sale.
- Cart is read-only after deactivation.
"""

import uuid

from django.conf import settings
from django.db import models

User = settings.AUTH_USER_MODEL


class PosCart(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="pos_carts",
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user"],
                condition=models.Q(is_active=True),
                name="one_active_pos_cart_per_user",
            )
        ]

    def __str__(self):
        status = "ACTIVE" if self.is_active else "CLOSED"
        return f"Cart {self.id} | {self.user} | {status}"
