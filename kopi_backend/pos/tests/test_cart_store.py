# pos/tests/test_cart_store.py

"""
CART STORE TESTS

GUARANTEES:
- one active stored cart per user, resolved from the user alone
- edits persist lines with their snapshotted name and unit price
- a closed cart is never handed out again
"""

from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.test import TestCase

from pos.cart import Cart
from pos.cart_store import close_cart, edit_cart, load_cart, lock_cart, save_cart
from pos.models import PosCart, PosCartItem
from products.models import Product

User = get_user_model()


class CartStoreTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="kasir", password="pass")
        self.kopi = Product.objects.create(code="es-kopi-susu", name="Es Kopi Susu", price=Decimal("10000"))
        self.aren = Product.objects.create(code="kopi-gula-aren", name="Kopi Gula Aren", price=Decimal("13000"))

    def test_load_creates_one_active_cart(self):
        first = load_cart(self.user)
        second = load_cart(self.user)

        self.assertTrue(first.is_empty)
        self.assertEqual(first.cart_id, second.cart_id)
        self.assertEqual(PosCart.objects.filter(user=self.user, is_active=True).count(), 1)

    def test_edit_persists_lines_in_order(self):
        with edit_cart(self.user) as cart:
            cart.add_item(self.aren)
            cart.add_item(self.kopi)
            cart.add_item(self.kopi)

        stored = load_cart(self.user)

        self.assertEqual([line.name for line in stored], ["Kopi Gula Aren", "Es Kopi Susu"])
        self.assertEqual(stored.get(self.kopi.id).quantity, 2)
        self.assertEqual(stored.total(), Decimal("33000.00"))

    def test_unit_price_is_snapshotted(self):
        with edit_cart(self.user) as cart:
            cart.add_item(self.kopi)

        self.kopi.price = Decimal("12000")
        self.kopi.save()

        item = PosCartItem.objects.get(product=self.kopi)
        self.assertEqual(item.unit_price, Decimal("10000.00"))
        self.assertEqual(load_cart(self.user).total(), Decimal("10000.00"))

    def test_save_replaces_lines(self):
        with edit_cart(self.user) as cart:
            cart.add_item(self.kopi)

        replacement = Cart()
        replacement.add_item(self.aren)
        save_cart(self.user, replacement)

        stored = load_cart(self.user)
        self.assertIsNone(stored.get(self.kopi.id))
        self.assertEqual(stored.item_count, 1)
        self.assertEqual(replacement.cart_id, stored.cart_id)

    def test_closed_cart_is_not_reused(self):
        with edit_cart(self.user) as cart:
            cart.add_item(self.kopi)

        close_cart(cart.cart_id)

        self.assertIsNone(lock_cart(cart.cart_id))
        fresh = load_cart(self.user)
        self.assertTrue(fresh.is_empty)
        self.assertNotEqual(fresh.cart_id, cart.cart_id)

    def test_lock_returns_stored_lines(self):
        with edit_cart(self.user) as cart:
            cart.add_item(self.kopi)

        with transaction.atomic():
            locked = lock_cart(cart.cart_id)

        self.assertEqual(locked.item_count, 1)
        self.assertEqual(locked.cart_id, cart.cart_id)

    def test_carts_are_isolated_per_user(self):
        other = User.objects.create_user(username="kasir2", password="pass")

        with edit_cart(self.user) as cart:
            cart.add_item(self.kopi)

        self.assertTrue(load_cart(other).is_empty)
        self.assertEqual(load_cart(self.user).item_count, 1)

    def test_second_active_cart_is_rejected(self):
        load_cart(self.user)

        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                PosCart.objects.create(user=self.user, is_active=True)
