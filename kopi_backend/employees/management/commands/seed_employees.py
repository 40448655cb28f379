from django.core.management.base import BaseCommand
from django.db import transaction

from employees.models import Employee

STAFF = [
    ("Kasir Default", Employee.Role.CASHIER),
    ("Owner", Employee.Role.OWNER),
]


class Command(BaseCommand):
    help = "Seed the default staff list used by the checkout cashier picker"

    @transaction.atomic
    def handle(self, *args, **options):
        for name, role in STAFF:
            employee, created = Employee.objects.get_or_create(
                name=name,
                defaults={"role": role, "is_active": True},
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f"Created employee: {employee}"))
            else:
                self.stdout.write(f"Employee already exists: {employee}")
