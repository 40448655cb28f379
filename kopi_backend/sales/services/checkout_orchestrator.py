# sales/services/checkout_orchestrator.py

"""
CHECKOUT ORCHESTRATOR (APPLICATION SERVICE)

Purpose:
- Turn a non-empty POS cart into a persisted Sale plus its receipt.
- Hand the receipt to the printer as a separate, non-fatal step.

Hard rules:
- Sale, SaleItem rows and one ProductTransaction per cart line are written
  inside ONE database transaction: all of them commit or none do.
- Money values are computed server-side from the cart snapshot.
- A persistence failure leaves the cart untouched so the operator can retry.
- The stored cart is locked and closed in the sale transaction, so the same
  cart can never produce two sales.
- Printing never fails a sale; it reports a PrintStatus instead.
"""

from __future__ import annotations

import enum
import logging
import secrets
from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone

from pos.cart_store import close_cart, lock_cart
from printing.receipt import Discount, ReceiptData, ReceiptItem
from products.models import Product
from products.money import to_money
from sales.models import ProductTransaction, Sale, SaleItem

logger = logging.getLogger(__name__)

PAYMENT_METHODS = tuple(Sale.PaymentMethod.values)


class CheckoutError(Exception):
    """Base checkout exception"""


class EmptyCartError(CheckoutError):
    pass


class InvalidPaymentMethodError(CheckoutError):
    pass


class PersistenceError(CheckoutError):
    """The sale could not be stored; nothing was written and the cart is kept."""


class PrintStatus(str, enum.Enum):
    PRINTED = "printed"
    FAILED = "failed"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class CheckoutResult:
    sale: Sale
    receipt: ReceiptData


def default_cashier_name() -> str:
    return getattr(settings, "POS_DEFAULT_CASHIER_NAME", "") or "Kasir Default"


def generate_transaction_id(now=None) -> str:
    """TRX-<local YYYYMMDDHHMMSS>-<12 random hex digits>."""
    now = timezone.localtime(now or timezone.now())
    return f"TRX-{now:%Y%m%d%H%M%S}-{secrets.token_hex(6)}"


# ======================================================
# PERSISTENCE
# ======================================================


def _build_receipt(*, cart, payment_method: str, cashier: str) -> ReceiptData:
    now = timezone.now()
    return ReceiptData.build(
        transaction_id=generate_transaction_id(now),
        timestamp=now,
        items=[
            ReceiptItem.of(name=line.name, qty=line.quantity, price=line.unit_price)
            for line in cart
        ],
        payment_method=payment_method,
        employee_name=cashier,
    )


@transaction.atomic
def _persist_sale(
    *,
    cart,
    payment_method: str,
    cashier: str,
    employee=None,
    user=None,
) -> tuple[Sale, ReceiptData]:
    """
    GUARANTEES:
    - A stored cart is locked (select_for_update) for the whole write and
      closed in the same transaction as its Sale.
    - The stored lines are authoritative; a cart that is already closed or
      emptied raises EmptyCartError and writes nothing.
    """
    cart_id = getattr(cart, "cart_id", None)
    if cart_id is not None:
        stored = lock_cart(cart_id)
        if stored is None or stored.is_empty:
            raise EmptyCartError("Cart has already been checked out")
        cart = stored

    receipt = _build_receipt(cart=cart, payment_method=payment_method, cashier=cashier)

    sale = Sale.objects.create(
        transaction_id=receipt.transaction_id,
        sold_at=receipt.timestamp,
        subtotal_amount=receipt.subtotal,
        discount_name=receipt.discount.name if receipt.discount else "",
        discount_amount=receipt.discount.amount if receipt.discount else Decimal("0.00"),
        total_amount=receipt.total,
        payment_method=receipt.payment_method,
        employee_name=receipt.employee_name or "",
        employee=employee,
        user=user,
    )

    # Lines keep their name snapshot even if the product was deleted meanwhile.
    products = {
        str(pk): product
        for pk, product in Product.objects.in_bulk([line.product_id for line in cart]).items()
    }

    sale_items = []
    transactions = []
    for position, line in enumerate(cart):
        product = products.get(str(line.product_id))
        sale_items.append(
            SaleItem(
                sale=sale,
                product=product,
                name=line.name,
                quantity=line.quantity,
                unit_price=to_money(line.unit_price),
                subtotal=line.line_total,
                position=position,
            )
        )
        transactions.append(
            ProductTransaction(
                sale=sale,
                product=product,
                product_name=line.name,
                quantity_sold=line.quantity,
                line_total=line.line_total,
                type=ProductTransaction.TYPE_SALE,
                employee_name=receipt.employee_name or "",
            )
        )

    SaleItem.objects.bulk_create(sale_items)
    ProductTransaction.objects.bulk_create(transactions)

    if cart_id is not None:
        close_cart(cart_id)

    return sale, receipt


# ======================================================
# CHECKOUT
# ======================================================


def checkout_cart(
    *,
    cart,
    payment_method: str,
    employee_name: str | None = None,
    employee=None,
    user=None,
) -> CheckoutResult:
    if cart.is_empty:
        raise EmptyCartError("Cart is empty")

    pm = (payment_method or "").strip()
    if pm not in PAYMENT_METHODS:
        raise InvalidPaymentMethodError(
            f"Unsupported payment method '{payment_method}'. Use one of: {', '.join(PAYMENT_METHODS)}"
        )

    cashier = (employee_name or "").strip() or (employee.name if employee else "") or default_cashier_name()

    try:
        sale, receipt = _persist_sale(
            cart=cart,
            payment_method=pm,
            cashier=cashier,
            employee=employee,
            user=user,
        )
    except DatabaseError as exc:
        logger.exception(
            "Checkout persistence failed",
            extra={"cart_id": str(getattr(cart, "cart_id", "") or ""), "lines": len(cart)},
        )
        raise PersistenceError("Sale could not be saved. Please try again.") from exc

    cart.clear()

    logger.info(
        "Checkout committed",
        extra={
            "transaction_id": sale.transaction_id,
            "total": str(sale.total_amount),
            "payment_method": sale.payment_method,
            "lines": len(receipt.items),
        },
    )
    return CheckoutResult(sale=sale, receipt=receipt)


# ======================================================
# RECEIPTS + PRINTING
# ======================================================


def receipt_from_sale(sale: Sale) -> ReceiptData:
    """Rebuild the receipt of a stored sale (reprint)."""
    discount = None
    if sale.discount_amount and sale.discount_amount > 0:
        discount = Discount(name=sale.discount_name, amount=to_money(sale.discount_amount))

    return ReceiptData(
        transaction_id=sale.transaction_id,
        timestamp=sale.sold_at,
        items=tuple(
            ReceiptItem(
                name=item.name,
                qty=item.quantity,
                price=to_money(item.unit_price),
                subtotal=to_money(item.subtotal),
            )
            for item in sale.items.all()
        ),
        subtotal=to_money(sale.subtotal_amount),
        total=to_money(sale.total_amount),
        payment_method=sale.payment_method,
        discount=discount,
        employee_name=sale.employee_name or None,
    )


def print_receipt_for_checkout(*, receipt: ReceiptData, printer) -> PrintStatus:
    if printer is None or not getattr(printer, "available", False):
        return PrintStatus.UNAVAILABLE

    try:
        printed = printer.print_receipt(receipt)
    except Exception:
        # Sale is committed at this point; report as not printed.
        logger.exception("Printer raised during receipt printing", extra={"transaction_id": receipt.transaction_id})
        printed = False

    status = PrintStatus.PRINTED if printed else PrintStatus.FAILED
    logger.info(
        "Receipt print finished",
        extra={"transaction_id": receipt.transaction_id, "print_status": status.value},
    )
    return status
