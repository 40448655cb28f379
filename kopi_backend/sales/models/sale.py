# sales/models/sale.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

User = settings.AUTH_USER_MODEL


class Sale(models.Model):
    """
    Represents a completed POS transaction.

    GUARANTEES:
    - transaction_id is unique (enforced by the database)
    - total_amount == subtotal_amount - discount_amount
    - Written together with its items and ProductTransaction rows in one
      database transaction (see checkout_orchestrator)
    """

    class PaymentMethod(models.TextChoices):
        CASH = "Tunai", "Tunai"
        QRIS = "QRIS", "QRIS"
        TRANSFER = "Transfer", "Transfer"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    transaction_id = models.CharField(
        max_length=64,
        unique=True,
        help_text="Receipt number, e.g. TRX-20260105143015-1a2b3c4d5e6f",
    )

    sold_at = models.DateTimeField(default=timezone.now, db_index=True)

    subtotal_amount = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    discount_name = models.CharField(max_length=100, blank=True)
    discount_amount = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    total_amount = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )

    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.CASH,
        db_index=True,
    )

    # Name snapshot; the employee row may later be renamed or deleted.
    employee_name = models.CharField(max_length=150, blank=True)
    employee = models.ForeignKey(
        "employees.Employee",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sales",
    )

    user = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sales",
        help_text="Logged-in operator who processed the sale",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-sold_at"]

    def __str__(self):
        return f"{self.transaction_id} - {self.total_amount}"
