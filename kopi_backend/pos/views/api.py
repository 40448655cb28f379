# pos/views/api.py

"""
POS API VIEWS

Purpose:
- Per-user stored cart lifecycle (one active cart per authenticated user)
- Add / adjust / remove / clear items (server-owned pricing)
- Checkout endpoint that persists the cart as a Sale, then prints the receipt

Hard rules:
- Money is server-owned: unit_price is snapshotted from Product on add.
- A sale is never rolled back because of the printer; the response says
  whether the receipt printed and whether a reprint should be offered.
"""

from __future__ import annotations

from django.shortcuts import get_object_or_404

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework import status
from rest_framework import serializers

from drf_spectacular.utils import extend_schema, OpenApiExample

from employees.models import Employee
from pos.cart_store import edit_cart, load_cart
from printing.registry import get_printer
from products.models import Product

from sales.services.checkout_orchestrator import (
    checkout_cart,
    print_receipt_for_checkout,
    CheckoutError,
    EmptyCartError,
    InvalidPaymentMethodError,
    PersistenceError,
    PrintStatus,
)


# =====================================================
# SWAGGER INPUT SERIALIZERS
# =====================================================

class AddCartItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()


class AdjustCartItemInputSerializer(serializers.Serializer):
    delta = serializers.IntegerField()


class CheckoutCartInputSerializer(serializers.Serializer):
    payment_method = serializers.CharField(help_text="Tunai, QRIS or Transfer")
    employee_id = serializers.UUIDField(required=False, allow_null=True)


# =====================================================
# API ERROR NORMALIZATION
# =====================================================

def error_response(*, code: str, message: str, http_status: int):
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )


# =====================================================
# POS API VIEWS
# =====================================================

class ActiveCartView(APIView):
    """
    Current operator's cart; DELETE clears it.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        responses={200: dict},
        description="Get the active cart of the current user",
    )
    def get(self, request):
        return Response(load_cart(request.user).to_dict(), status=status.HTTP_200_OK)

    @extend_schema(
        responses={200: dict},
        description="Clear all cart lines",
    )
    def delete(self, request):
        with edit_cart(request.user) as cart:
            cart.clear()
        return Response(cart.to_dict(), status=status.HTTP_200_OK)


class AddCartItemView(APIView):
    """
    Add one unit of a product to the cart.

    Money rule:
    - Unit price is OWNED by Product (flat price or cheapest variant) and
      snapshotted server-side the first time the product is added.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=AddCartItemInputSerializer,
        responses={200: dict},
        description="Add a product to the cart (increments quantity by one if already present)",
    )
    def post(self, request):
        serializer = AddCartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = get_object_or_404(
            Product.objects.prefetch_related("variants"),
            id=serializer.validated_data["product_id"],
            is_active=True,
        )

        with edit_cart(request.user) as cart:
            cart.add_item(product)

        return Response(cart.to_dict(), status=status.HTTP_200_OK)


class CartItemView(APIView):
    """
    PATCH adjusts a line's quantity by `delta` (never below 1);
    DELETE removes the line.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=AdjustCartItemInputSerializer,
        responses={200: dict},
        description="Adjust quantity by delta (e.g. +1 / -1); quantity stays at least 1",
    )
    def patch(self, request, product_id):
        serializer = AdjustCartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with edit_cart(request.user) as cart:
            if cart.get(product_id) is None:
                return error_response(
                    code="NOT_IN_CART",
                    message="Product is not in the cart.",
                    http_status=status.HTTP_404_NOT_FOUND,
                )

            cart.adjust_quantity(product_id, serializer.validated_data["delta"])

        return Response(cart.to_dict(), status=status.HTTP_200_OK)

    @extend_schema(
        responses={200: dict},
        description="Remove a product line from the cart",
    )
    def delete(self, request, product_id):
        with edit_cart(request.user) as cart:
            cart.remove_item(product_id)

        return Response(cart.to_dict(), status=status.HTTP_200_OK)


class CheckoutCartView(APIView):
    """
    Checkout the active cart of the current user.

    Calls:
    - sales.services.checkout_orchestrator.checkout_cart()
    - sales.services.checkout_orchestrator.print_receipt_for_checkout()
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=CheckoutCartInputSerializer,
        responses={200: dict},
        description="Persist the cart as a sale, then print its receipt.",
        examples=[
            OpenApiExample(
                "Cash payment",
                summary="Cash, default cashier",
                value={"payment_method": "Tunai"},
                request_only=True,
            ),
            OpenApiExample(
                "QRIS payment with cashier",
                summary="QRIS, selected cashier",
                value={
                    "payment_method": "QRIS",
                    "employee_id": "07d0722f-92fd-4a83-b84e-6e25f034a647",
                },
                request_only=True,
            ),
        ],
    )
    def post(self, request):
        serializer = CheckoutCartInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        employee = None
        employee_id = serializer.validated_data.get("employee_id")
        if employee_id:
            employee = get_object_or_404(Employee, id=employee_id, is_active=True)

        cart = load_cart(request.user)

        try:
            result = checkout_cart(
                cart=cart,
                payment_method=serializer.validated_data["payment_method"],
                employee=employee,
                user=request.user,
            )
        except EmptyCartError as exc:
            return error_response(
                code="EMPTY_CART",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        except InvalidPaymentMethodError as exc:
            return error_response(
                code="INVALID_PAYMENT_METHOD",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        except PersistenceError as exc:
            return error_response(
                code="PERSISTENCE_FAILED",
                message=str(exc),
                http_status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        except CheckoutError as exc:
            return error_response(
                code="CHECKOUT_FAILED",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        print_status = print_receipt_for_checkout(receipt=result.receipt, printer=get_printer())

        return Response(
            {
                "sale_saved": True,
                "sale_id": str(result.sale.id),
                "transaction_id": result.sale.transaction_id,
                "total": str(result.sale.total_amount),
                "receipt": result.receipt.to_dict(),
                "print_status": print_status.value,
                "can_reprint": print_status == PrintStatus.FAILED,
            },
            status=status.HTTP_201_CREATED,
        )
