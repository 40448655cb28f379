# pos/cart_store.py

"""
CART STORE

Database persistence for the POS cart: one active PosCart per user,
resolved from the authenticated user (works the same for JWT bearer
clients and session clients).

Rules:
- Mutations go through edit_cart(), which locks the cart row for the
  whole read-modify-write.
- lock_cart() / close_cart() are used by checkout inside its own
  transaction; a closed cart is never checked out twice.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from django.db import transaction

from pos.cart import Cart, CartLine
from pos.models import PosCart, PosCartItem


def _active_record(user) -> PosCart:
    """
    Canonical active cart resolver: exactly one active cart per user.
    """
    record, _ = PosCart.objects.get_or_create(user=user, is_active=True)
    return record


def _to_cart(record: PosCart) -> Cart:
    lines = [
        CartLine(
            product_id=str(item.product_id),
            name=item.name,
            unit_price=item.unit_price,
            quantity=item.quantity,
        )
        for item in record.items.all()
    ]
    return Cart(lines, cart_id=record.pk)


def load_cart(user) -> Cart:
    return _to_cart(_active_record(user))


def save_cart(user, cart: Cart) -> None:
    with transaction.atomic():
        record = PosCart.objects.select_for_update().get(pk=_active_record(user).pk)

        record.items.all().delete()
        PosCartItem.objects.bulk_create(
            [
                PosCartItem(
                    cart=record,
                    product_id=line.product_id,
                    name=line.name,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    position=position,
                )
                for position, line in enumerate(cart)
            ]
        )
        record.save(update_fields=["updated_at"])

    cart.cart_id = record.pk


@contextmanager
def edit_cart(user) -> Iterator[Cart]:
    with transaction.atomic():
        record = PosCart.objects.select_for_update().get(pk=_active_record(user).pk)
        cart = _to_cart(record)
        yield cart
        save_cart(user, cart)


def lock_cart(cart_id) -> Optional[Cart]:
    """Lock the stored cart for checkout; None when it is already closed."""
    record = PosCart.objects.select_for_update().filter(pk=cart_id, is_active=True).first()
    if record is None:
        return None
    return _to_cart(record)


def close_cart(cart_id) -> None:
    PosCart.objects.filter(pk=cart_id).update(is_active=False)
