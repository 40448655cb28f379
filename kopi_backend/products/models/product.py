# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


class Product(models.Model):
    """
    Represents a sellable menu item.

    PRICING MODEL (IMPORTANT):
    - A product is priced EITHER by a flat price OR by size variants.
    - unit_price resolves to the flat price, else the lowest variant price,
      else 0.00. The POS cart snapshots unit_price when a product is added.
    """

    class Category(models.TextChoices):
        COFFEE = "coffee", "Coffee"
        NON_COFFEE = "non-coffee", "Non Coffee"
        TEA = "tea", "Tea"
        FRUITY = "fruity", "Fruity"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    code = models.SlugField(
        max_length=64,
        unique=True,
        help_text="Stable menu code, e.g. es-kopi-susu",
    )
    name = models.CharField(max_length=255, db_index=True)

    category = models.CharField(
        max_length=32,
        choices=Category.choices,
        default=Category.COFFEE,
        db_index=True,
    )
    subcategory = models.CharField(max_length=100, blank=True)

    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Flat selling price. Leave empty for products sold by size variant.",
    )

    description = models.TextField(blank=True)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["category", "name"]

    def clean(self):
        if self.price is not None and self.price < 0:
            raise ValidationError({"price": "Price cannot be negative"})

    @property
    def unit_price(self) -> Decimal:
        if self.price:
            return self.price

        if self.pk is None:
            return Decimal("0.00")

        prices = [v.price for v in self.variants.all()]
        if prices:
            return min(prices)
        return Decimal("0.00")

    def __str__(self):
        return self.name


class ProductVariant(models.Model):
    """
    Size variant of a product (e.g. Medium / Large).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="variants",
    )

    size = models.CharField(max_length=100)
    price = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        ordering = ["price", "size"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "size"],
                name="unique_size_per_product",
            )
        ]

    def clean(self):
        if self.price is None or self.price < 0:
            raise ValidationError({"price": "Variant price cannot be negative"})

    def __str__(self):
        return f"{self.product.name} ({self.size})"
