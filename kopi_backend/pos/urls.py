"""
PATH: pos/urls.py

POS URLS

Purpose:
- Session cart lifecycle
- Cart item operations
- Cart checkout (persists a Sale via checkout orchestrator, then prints)
"""

from django.urls import path

from pos.views.api import (
    ActiveCartView,
    AddCartItemView,
    CartItemView,
    CheckoutCartView,
)

app_name = "pos"

urlpatterns = [
    path("cart/", ActiveCartView.as_view(), name="active-cart"),
    path("cart/items/", AddCartItemView.as_view(), name="add-cart-item"),
    path("cart/items/<uuid:product_id>/", CartItemView.as_view(), name="cart-item"),

    path("checkout/", CheckoutCartView.as_view(), name="checkout"),
]
