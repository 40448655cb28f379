# sales/models/product_transaction.py

"""
PRODUCT TRANSACTION (ANALYTICS RECORD)

One row per sold cart line, written in the same database transaction as
its Sale. Feeds best-seller and per-product sales reporting.
"""

import uuid

from django.db import models

from products.models import Product

from .sale import Sale


class ProductTransaction(models.Model):
    TYPE_SALE = "sale"

    TYPE_CHOICES = [
        (TYPE_SALE, "Sale"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    sale = models.ForeignKey(
        Sale,
        on_delete=models.CASCADE,
        related_name="product_transactions",
    )
    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transactions",
    )

    product_name = models.CharField(max_length=255)
    quantity_sold = models.PositiveIntegerField()
    line_total = models.DecimalField(max_digits=12, decimal_places=2)

    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=TYPE_SALE)
    employee_name = models.CharField(max_length=150, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.product_name} x {self.quantity_sold} ({self.type})"
