"""
======================================================
PATH: products/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Product + ProductVariant (MENU CATALOG)
"""

from __future__ import annotations

import uuid

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        primary_key=True,
                        default=uuid.uuid4,
                        editable=False,
                        serialize=False,
                    ),
                ),
                (
                    "code",
                    models.SlugField(
                        max_length=64,
                        unique=True,
                        help_text="Stable menu code, e.g. es-kopi-susu",
                    ),
                ),
                ("name", models.CharField(max_length=255, db_index=True)),
                (
                    "category",
                    models.CharField(
                        max_length=32,
                        choices=[
                            ("coffee", "Coffee"),
                            ("non-coffee", "Non Coffee"),
                            ("tea", "Tea"),
                            ("fruity", "Fruity"),
                        ],
                        default="coffee",
                        db_index=True,
                    ),
                ),
                ("subcategory", models.CharField(max_length=100, blank=True)),
                (
                    "price",
                    models.DecimalField(
                        max_digits=12,
                        decimal_places=2,
                        null=True,
                        blank=True,
                        help_text="Flat selling price. Leave empty for products sold by size variant.",
                    ),
                ),
                ("description", models.TextField(blank=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["category", "name"],
            },
        ),
        migrations.CreateModel(
            name="ProductVariant",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        primary_key=True,
                        default=uuid.uuid4,
                        editable=False,
                        serialize=False,
                    ),
                ),
                ("size", models.CharField(max_length=100)),
                ("price", models.DecimalField(max_digits=12, decimal_places=2)),
                (
                    "product",
                    models.ForeignKey(
                        to="products.product",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="variants",
                    ),
                ),
            ],
            options={
                "ordering": ["price", "size"],
            },
        ),
        migrations.AddConstraint(
            model_name="productvariant",
            constraint=models.UniqueConstraint(
                fields=("product", "size"),
                name="unique_size_per_product",
            ),
        ),
    ]
