from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from products.models import Product, ProductVariant

MENU = [
    # code, name, category, subcategory, price, variants
    ("es-kopi-susu", "Es Kopi Susu", "coffee", "", 10000, []),
    ("kopi-gula-aren", "Kopi Gula Aren", "coffee", "", 13000, []),
    ("kopi-butterscotch", "Kopi Butterscotch", "coffee", "", 13000, []),
    ("kopi-hazelnut", "Kopi Hazelnut", "coffee", "", 13000, []),
    ("kopi-caramel", "Kopi Caramel", "coffee", "", 13000, []),
    ("moccacino", "Moccacino", "coffee", "", 13000, []),
    ("es-kopi-hitam-americano", "Es Kopi Hitam Americano", "coffee", "Americano Series", 8000, []),
    ("kopi-lemon", "Kopi Lemon", "coffee", "Americano Series", 13000, []),
    ("roca-peach-americano", "Roca Peach Americano", "coffee", "Americano Series", 20000, []),
    (
        "bottle-coffee",
        "Bottle Coffee",
        "coffee",
        "",
        None,
        [("Kopi Susu 1 Liter", 65000), ("Kopi Susu Aren", 70000)],
    ),
    ("oreo", "Oreo", "non-coffee", "", 8000, []),
    ("coklat", "Coklat", "non-coffee", "", 10000, []),
    ("taro-cheese", "Taro Cheese", "non-coffee", "", 12000, []),
    ("matcha-cheese", "Matcha Cheese", "non-coffee", "", 17000, []),
    ("orange-mojito", "Orange Mojito", "fruity", "", 10000, []),
    ("es-teh", "Es Teh", "tea", "", None, [("Medium", 2500), ("Large", 4000)]),
    ("lemon-tea", "Lemon Tea", "tea", "", 6000, []),
    ("thaitea", "Thaitea", "tea", "", None, [("Medium", 6000), ("Large", 10000)]),
    ("greentea", "Greentea", "tea", "", None, [("Medium", 7000), ("Large", 10000)]),
    ("mango-yakult", "Mango Yakult", "fruity", "", 8000, []),
]


class Command(BaseCommand):
    help = "Seed the coffee shop menu (flat-priced and size-variant products)"

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding menu..."))

        created_count = 0
        for code, name, category, subcategory, price, variants in MENU:
            product, created = Product.objects.update_or_create(
                code=code,
                defaults={
                    "name": name,
                    "category": category,
                    "subcategory": subcategory,
                    "price": Decimal(price) if price is not None else None,
                    "is_active": True,
                },
            )
            created_count += int(created)

            for size, variant_price in variants:
                ProductVariant.objects.update_or_create(
                    product=product,
                    size=size,
                    defaults={"price": Decimal(variant_price)},
                )

        self.stdout.write(
            self.style.SUCCESS(f"Menu ready: {len(MENU)} products ({created_count} new).")
        )
