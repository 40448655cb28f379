# pos/tests/test_api.py

"""
POS API TESTS

Cart endpoints keep one stored cart per authenticated user; checkout
persists a Sale and reports the print outcome without ever failing the sale.
"""

from __future__ import annotations

from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import RefreshToken

from employees.models import Employee
from pos.models import PosCart
from products.models import Product, ProductVariant
from sales.models import ProductTransaction, Sale

User = get_user_model()


class FakePrinter:
    available = True

    def __init__(self, result=True):
        self.result = result
        self.printed = []

    def print_receipt(self, receipt):
        self.printed.append(receipt)
        return self.result


class PosApiTestCase(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="kasir", password="pass")
        self.client.force_authenticate(self.user)

        self.kopi = Product.objects.create(
            code="es-kopi-susu", name="Es Kopi Susu", category="coffee", price=Decimal("10000")
        )
        self.teh = Product.objects.create(code="es-teh", name="Es Teh", category="tea")
        ProductVariant.objects.create(product=self.teh, size="Medium", price=Decimal("2500"))
        ProductVariant.objects.create(product=self.teh, size="Large", price=Decimal("4000"))

    def add(self, product):
        return self.client.post("/api/pos/cart/items/", {"product_id": str(product.id)}, format="json")


class CartApiTests(PosApiTestCase):
    def test_empty_cart(self):
        response = self.client.get("/api/pos/cart/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {"items": [], "item_count": 0, "total": "0.00"})

    def test_add_item_persists_in_stored_cart(self):
        self.add(self.kopi)
        self.add(self.kopi)
        self.add(self.teh)

        response = self.client.get("/api/pos/cart/")

        self.assertEqual(response.data["item_count"], 3)
        self.assertEqual(response.data["total"], "22500.00")
        teh_line = response.data["items"][1]
        self.assertEqual(teh_line["unit_price"], "2500.00")

    def test_add_unknown_product_is_404(self):
        response = self.client.post(
            "/api/pos/cart/items/",
            {"product_id": "00000000-0000-0000-0000-000000000000"},
            format="json",
        )
        self.assertEqual(response.status_code, 404)

    def test_adjust_quantity_never_below_one(self):
        self.add(self.kopi)

        response = self.client.patch(f"/api/pos/cart/items/{self.kopi.id}/", {"delta": 3}, format="json")
        self.assertEqual(response.data["items"][0]["quantity"], 4)

        response = self.client.patch(f"/api/pos/cart/items/{self.kopi.id}/", {"delta": -999}, format="json")
        self.assertEqual(response.data["items"][0]["quantity"], 1)

    def test_adjust_missing_line_is_404(self):
        response = self.client.patch(f"/api/pos/cart/items/{self.kopi.id}/", {"delta": 1}, format="json")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"]["code"], "NOT_IN_CART")

    def test_remove_and_clear(self):
        self.add(self.kopi)
        self.add(self.teh)

        response = self.client.delete(f"/api/pos/cart/items/{self.kopi.id}/")
        self.assertEqual([i["name"] for i in response.data["items"]], ["Es Teh"])

        response = self.client.delete("/api/pos/cart/")
        self.assertEqual(response.data["items"], [])

    def test_cart_requires_authentication(self):
        self.client.force_authenticate(None)
        self.assertEqual(self.client.get("/api/pos/cart/").status_code, 401)


class CheckoutApiTests(PosApiTestCase):
    """
    GUARANTEES:
    - successful checkout saves the sale and clears the cart
    - printer failure never rolls back the sale; reprint is offered
    - persistence failure keeps the cart and reports a retryable error
    """

    def checkout(self, **payload):
        payload.setdefault("payment_method", "Tunai")
        return self.client.post("/api/pos/checkout/", payload, format="json")

    def test_checkout_without_printer(self):
        self.add(self.kopi)
        self.add(self.kopi)

        response = self.checkout()

        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.data["sale_saved"])
        self.assertEqual(response.data["total"], "20000.00")
        self.assertEqual(response.data["print_status"], "unavailable")
        self.assertFalse(response.data["can_reprint"])
        self.assertEqual(response.data["receipt"]["employee_name"], "Kasir Default")

        sale = Sale.objects.get(id=response.data["sale_id"])
        self.assertEqual(sale.user, self.user)
        self.assertEqual(self.client.get("/api/pos/cart/").data["items"], [])

    def test_checkout_prints_receipt(self):
        printer = FakePrinter(result=True)
        self.add(self.teh)

        with mock.patch("pos.views.api.get_printer", return_value=printer):
            response = self.checkout(payment_method="QRIS")

        self.assertEqual(response.data["print_status"], "printed")
        self.assertFalse(response.data["can_reprint"])
        self.assertEqual(printer.printed[0].transaction_id, response.data["transaction_id"])

    def test_print_failure_keeps_sale_and_offers_reprint(self):
        self.add(self.kopi)

        with mock.patch("pos.views.api.get_printer", return_value=FakePrinter(result=False)):
            response = self.checkout()

        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.data["sale_saved"])
        self.assertEqual(response.data["print_status"], "failed")
        self.assertTrue(response.data["can_reprint"])
        self.assertTrue(Sale.objects.filter(id=response.data["sale_id"]).exists())

    def test_checkout_with_selected_employee(self):
        sari = Employee.objects.create(name="Sari")
        self.add(self.kopi)

        response = self.checkout(employee_id=str(sari.id))

        sale = Sale.objects.get(id=response.data["sale_id"])
        self.assertEqual(sale.employee, sari)
        self.assertEqual(sale.employee_name, "Sari")

    def test_empty_cart_checkout(self):
        response = self.checkout()

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "EMPTY_CART")
        self.assertEqual(Sale.objects.count(), 0)

    def test_invalid_payment_method(self):
        self.add(self.kopi)

        response = self.checkout(payment_method="Bitcoin")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "INVALID_PAYMENT_METHOD")
        self.assertEqual(len(self.client.get("/api/pos/cart/").data["items"]), 1)

    def test_persistence_failure_keeps_cart(self):
        self.add(self.kopi)
        self.add(self.teh)

        with mock.patch.object(
            ProductTransaction.objects, "bulk_create", side_effect=DatabaseError("disk full")
        ):
            response = self.checkout()

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.data["error"]["code"], "PERSISTENCE_FAILED")
        self.assertEqual(Sale.objects.count(), 0)
        self.assertEqual(self.client.get("/api/pos/cart/").data["item_count"], 2)

    def test_second_checkout_of_same_cart_is_rejected(self):
        self.add(self.kopi)

        first = self.checkout()
        second = self.checkout()

        self.assertEqual(first.status_code, 201)
        self.assertEqual(second.status_code, 400)
        self.assertEqual(second.data["error"]["code"], "EMPTY_CART")
        self.assertEqual(Sale.objects.count(), 1)
        self.assertEqual(PosCart.objects.filter(user=self.user, is_active=False).count(), 1)
        self.assertEqual(PosCart.objects.filter(user=self.user, is_active=True).count(), 1)


class BearerTokenCartTests(PosApiTestCase):
    """
    GUARANTEES:
    - a JWT bearer client that never sends cookies keeps its cart between
      requests and can check it out
    - carts are scoped per user, not per browser session
    """

    def setUp(self):
        super().setUp()
        self.client.force_authenticate(None)
        self.use_token(self.user)

    def use_token(self, user):
        token = RefreshToken.for_user(user).access_token
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

    def test_checkout_without_cookies(self):
        self.add(self.kopi)
        self.add(self.teh)
        self.client.cookies.clear()

        self.assertEqual(self.client.get("/api/pos/cart/").data["item_count"], 2)

        self.client.cookies.clear()
        response = self.client.post("/api/pos/checkout/", {"payment_method": "Tunai"}, format="json")

        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.data["sale_saved"])
        self.assertEqual(response.data["total"], "12500.00")
        sale = Sale.objects.get(id=response.data["sale_id"])
        self.assertEqual(sale.user, self.user)
        self.assertEqual(sale.items.count(), 2)

    def test_carts_are_per_user(self):
        other = User.objects.create_user(username="kasir2", password="pass")
        self.add(self.kopi)

        self.use_token(other)
        self.assertEqual(self.client.get("/api/pos/cart/").data["items"], [])

        self.use_token(self.user)
        self.assertEqual(self.client.get("/api/pos/cart/").data["item_count"], 1)
