# employees/models.py

import uuid

from django.db import models


class Employee(models.Model):
    """
    Shop staff that can be recorded as the cashier on a sale.

    Employees are not login accounts; a sale stores the employee
    reference and a snapshot of the name at checkout time.
    """

    class Role(models.TextChoices):
        ADMIN = "Admin", "Admin"
        CASHIER = "Kasir", "Kasir"
        OWNER = "Owner", "Owner"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=150)
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.CASHIER,
        db_index=True,
    )
    phone_number = models.CharField(max_length=32, blank=True)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.role})"
