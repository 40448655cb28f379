"""
======================================================
PATH: employees/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Employee
"""

from __future__ import annotations

import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Employee",
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
                ("name", models.CharField(max_length=150)),
                (
                    "role",
                    models.CharField(
                        max_length=20,
                        choices=[("Admin", "Admin"), ("Kasir", "Kasir"), ("Owner", "Owner")],
                        default="Kasir",
                        db_index=True,
                    ),
                ),
                ("phone_number", models.CharField(max_length=32, blank=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
    ]
