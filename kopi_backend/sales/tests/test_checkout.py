# sales/tests/test_checkout.py

"""
CHECKOUT ORCHESTRATOR TESTS

GUARANTEES:
- Sale, SaleItems and ProductTransactions commit together or not at all
- total == sum(line totals) for every checkout
- transaction ids are unique and follow TRX-<timestamp>-<hex>
- printing outcome never affects the persisted sale
- a stored cart is checked out at most once
"""

from __future__ import annotations

import re
from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import TestCase, override_settings

from pos.cart import Cart
from pos.cart_store import edit_cart, load_cart
from pos.models import PosCart
from printing.receipt_encoder import encode_receipt
from printing.transport import NullPrinterTransport
from products.models import Product, ProductVariant
from sales.models import ProductTransaction, Sale, SaleItem
from sales.services.checkout_orchestrator import (
    EmptyCartError,
    InvalidPaymentMethodError,
    PersistenceError,
    PrintStatus,
    checkout_cart,
    generate_transaction_id,
    print_receipt_for_checkout,
    receipt_from_sale,
)

User = get_user_model()

TRX_PATTERN = re.compile(r"^TRX-\d{14}-[0-9a-f]{12}$")


class StubPrinter:
    available = True

    def __init__(self, result=True, error=None):
        self.result = result
        self.error = error
        self.calls = 0

    def print_receipt(self, receipt):
        self.calls += 1
        if self.error:
            raise self.error
        return self.result


class CheckoutTestCase(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="kasir", password="pass")

        self.kopi = Product.objects.create(code="es-kopi-susu", name="Es Kopi Susu", price=Decimal("10000"))
        self.aren = Product.objects.create(code="kopi-gula-aren", name="Kopi Gula Aren", price=Decimal("13000"))
        self.thai = Product.objects.create(code="thaitea", name="Thaitea", category="tea")
        ProductVariant.objects.create(product=self.thai, size="Medium", price=Decimal("6000"))
        ProductVariant.objects.create(product=self.thai, size="Large", price=Decimal("10000"))

    def cart_with(self, *pairs):
        cart = Cart()
        for product, qty in pairs:
            cart.add_item(product)
            cart.adjust_quantity(product.id, qty - 1)
        return cart


class CheckoutCartTests(CheckoutTestCase):
    def test_es_kopi_susu_scenario(self):
        cart = self.cart_with((self.kopi, 2))

        result = checkout_cart(cart=cart, payment_method="Tunai")

        sale = result.sale
        self.assertEqual(sale.total_amount, Decimal("20000.00"))
        self.assertEqual(sale.subtotal_amount, Decimal("20000.00"))
        self.assertEqual(sale.payment_method, Sale.PaymentMethod.CASH)
        self.assertEqual(sale.employee_name, "Kasir Default")

        self.assertEqual(result.receipt.total, Decimal("20000.00"))
        self.assertEqual(result.receipt.items[0].qty, 2)

        tx = ProductTransaction.objects.get(sale=sale)
        self.assertEqual(tx.product, self.kopi)
        self.assertEqual(tx.quantity_sold, 2)
        self.assertEqual(tx.type, "sale")

        self.assertTrue(cart.is_empty)

    def test_total_equals_sum_of_lines(self):
        carts = [
            self.cart_with((self.kopi, 1)),
            self.cart_with((self.kopi, 3), (self.thai, 2)),
            self.cart_with((self.aren, 7), (self.thai, 1), (self.kopi, 12)),
        ]
        for cart in carts:
            expected = sum((line.unit_price * line.quantity for line in cart), Decimal("0"))

            result = checkout_cart(cart=cart, payment_method="QRIS", user=self.user)

            self.assertEqual(result.sale.total_amount, expected)
            self.assertEqual(result.receipt.total, expected)
            self.assertEqual(
                sum(i.subtotal for i in result.sale.items.all()),
                expected,
            )

    def test_one_product_transaction_per_line(self):
        cart = self.cart_with((self.kopi, 2), (self.aren, 1), (self.thai, 3))

        sale = checkout_cart(cart=cart, payment_method="Transfer").sale

        self.assertEqual(sale.items.count(), 3)
        self.assertEqual(ProductTransaction.objects.filter(sale=sale).count(), 3)
        self.assertEqual(
            [i.name for i in sale.items.all()],
            ["Es Kopi Susu", "Kopi Gula Aren", "Thaitea"],
        )

    def test_explicit_employee_name(self):
        cart = self.cart_with((self.kopi, 1))

        sale = checkout_cart(cart=cart, payment_method="Tunai", employee_name="Sari").sale

        self.assertEqual(sale.employee_name, "Sari")
        self.assertEqual(ProductTransaction.objects.get(sale=sale).employee_name, "Sari")

    @override_settings(POS_DEFAULT_CASHIER_NAME="Kasir Pagi")
    def test_default_cashier_from_settings(self):
        sale = checkout_cart(cart=self.cart_with((self.kopi, 1)), payment_method="Tunai").sale
        self.assertEqual(sale.employee_name, "Kasir Pagi")

    def test_deleted_product_keeps_name_snapshot(self):
        cart = self.cart_with((self.kopi, 1))
        self.kopi.delete()

        sale = checkout_cart(cart=cart, payment_method="Tunai").sale

        item = sale.items.get()
        self.assertIsNone(item.product)
        self.assertEqual(item.name, "Es Kopi Susu")

    def test_empty_cart_raises_without_side_effects(self):
        with self.assertRaises(EmptyCartError):
            checkout_cart(cart=Cart(), payment_method="Tunai")

        self.assertEqual(Sale.objects.count(), 0)

    def test_invalid_payment_method(self):
        cart = self.cart_with((self.kopi, 1))

        with self.assertRaises(InvalidPaymentMethodError):
            checkout_cart(cart=cart, payment_method="cash")

        self.assertFalse(cart.is_empty)
        self.assertEqual(Sale.objects.count(), 0)


class AtomicPersistenceTests(CheckoutTestCase):
    def _assert_nothing_written(self):
        self.assertEqual(Sale.objects.count(), 0)
        self.assertEqual(SaleItem.objects.count(), 0)
        self.assertEqual(ProductTransaction.objects.count(), 0)

    def test_analytics_write_failure_rolls_back_sale(self):
        cart = self.cart_with((self.kopi, 2), (self.thai, 1))

        with mock.patch.object(
            ProductTransaction.objects, "bulk_create", side_effect=DatabaseError("write failed")
        ):
            with self.assertRaises(PersistenceError):
                checkout_cart(cart=cart, payment_method="Tunai")

        self._assert_nothing_written()
        self.assertEqual(cart.item_count, 3)

    def test_sale_item_write_failure_rolls_back_sale(self):
        cart = self.cart_with((self.kopi, 1))

        with mock.patch.object(SaleItem.objects, "bulk_create", side_effect=DatabaseError("write failed")):
            with self.assertRaises(PersistenceError):
                checkout_cart(cart=cart, payment_method="Tunai")

        self._assert_nothing_written()
        self.assertFalse(cart.is_empty)

    def test_retry_after_failure_succeeds(self):
        cart = self.cart_with((self.kopi, 1))

        with mock.patch.object(
            ProductTransaction.objects, "bulk_create", side_effect=DatabaseError("write failed")
        ):
            with self.assertRaises(PersistenceError):
                checkout_cart(cart=cart, payment_method="Tunai")

        result = checkout_cart(cart=cart, payment_method="Tunai")

        self.assertEqual(Sale.objects.count(), 1)
        self.assertEqual(ProductTransaction.objects.filter(sale=result.sale).count(), 1)


class StoredCartCheckoutTests(CheckoutTestCase):
    """
    GUARANTEES:
    - a stored cart is closed in the same transaction that saves its Sale
    - the same stored cart can never produce two sales
    - a failed write leaves the stored cart active with its lines
    """

    def stored_cart_with(self, *pairs):
        with edit_cart(self.user) as cart:
            for product, qty in pairs:
                cart.add_item(product)
                cart.adjust_quantity(product.id, qty - 1)
        return cart

    def test_checkout_closes_stored_cart(self):
        cart = self.stored_cart_with((self.kopi, 2))
        cart_id = cart.cart_id

        checkout_cart(cart=cart, payment_method="Tunai", user=self.user)

        self.assertFalse(PosCart.objects.get(pk=cart_id).is_active)
        fresh = load_cart(self.user)
        self.assertTrue(fresh.is_empty)
        self.assertNotEqual(fresh.cart_id, cart_id)

    def test_two_copies_of_one_cart_make_one_sale(self):
        self.stored_cart_with((self.kopi, 1), (self.aren, 1))
        first = load_cart(self.user)
        second = load_cart(self.user)

        checkout_cart(cart=first, payment_method="Tunai", user=self.user)

        with self.assertRaises(EmptyCartError):
            checkout_cart(cart=second, payment_method="QRIS", user=self.user)

        self.assertEqual(Sale.objects.count(), 1)
        self.assertEqual(ProductTransaction.objects.count(), 2)

    def test_stored_lines_win_over_stale_copy(self):
        stale = self.stored_cart_with((self.kopi, 1))
        with edit_cart(self.user) as cart:
            cart.adjust_quantity(self.kopi.id, 2)

        result = checkout_cart(cart=stale, payment_method="Tunai", user=self.user)

        self.assertEqual(result.sale.total_amount, Decimal("30000.00"))

    def test_failed_write_keeps_stored_cart(self):
        cart = self.stored_cart_with((self.kopi, 1), (self.thai, 2))

        with mock.patch.object(
            ProductTransaction.objects, "bulk_create", side_effect=DatabaseError("write failed")
        ):
            with self.assertRaises(PersistenceError):
                checkout_cart(cart=cart, payment_method="Tunai", user=self.user)

        self.assertEqual(Sale.objects.count(), 0)
        self.assertTrue(PosCart.objects.get(pk=cart.cart_id).is_active)
        self.assertEqual(load_cart(self.user).item_count, 3)


class TransactionIdTests(TestCase):
    def test_format(self):
        self.assertRegex(generate_transaction_id(), TRX_PATTERN)

    def test_ids_generated_in_same_second_differ(self):
        ids = {generate_transaction_id() for _ in range(200)}
        self.assertEqual(len(ids), 200)


class ReceiptPrintingTests(CheckoutTestCase):
    def setUp(self):
        super().setUp()
        self.result = checkout_cart(cart=self.cart_with((self.kopi, 2)), payment_method="Tunai")

    def test_printed(self):
        printer = StubPrinter(result=True)

        status = print_receipt_for_checkout(receipt=self.result.receipt, printer=printer)

        self.assertEqual(status, PrintStatus.PRINTED)
        self.assertEqual(printer.calls, 1)

    def test_failed_print_keeps_sale(self):
        status = print_receipt_for_checkout(receipt=self.result.receipt, printer=StubPrinter(result=False))

        self.assertEqual(status, PrintStatus.FAILED)
        self.assertTrue(Sale.objects.filter(pk=self.result.sale.pk).exists())

    def test_printer_exception_is_reported_as_failed(self):
        printer = StubPrinter(error=RuntimeError("driver crashed"))

        status = print_receipt_for_checkout(receipt=self.result.receipt, printer=printer)

        self.assertEqual(status, PrintStatus.FAILED)

    def test_no_printer_is_unavailable(self):
        for printer in (None, NullPrinterTransport()):
            status = print_receipt_for_checkout(receipt=self.result.receipt, printer=printer)
            self.assertEqual(status, PrintStatus.UNAVAILABLE)

    def test_reprint_receipt_matches_checkout_receipt(self):
        sale = Sale.objects.get(pk=self.result.sale.pk)

        rebuilt = receipt_from_sale(sale)

        self.assertEqual(rebuilt.transaction_id, self.result.receipt.transaction_id)
        self.assertEqual(rebuilt.total, self.result.receipt.total)
        self.assertEqual(encode_receipt(rebuilt), encode_receipt(self.result.receipt))
