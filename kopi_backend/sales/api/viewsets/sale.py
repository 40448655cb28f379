# sales/api/viewsets/sale.py

"""
======================================================
PATH: sales/api/viewsets/sale.py
======================================================
SALE VIEWSET (STAFF)

Purpose:
- "Sales History" API for the POS back office.
- List + retrieve sales with basic filters.
- Reprint a stored sale's receipt ("Cetak Ulang Nota").
- Latest per-line ProductTransaction records.

Filters (list):
- payment_method   exact (Tunai / QRIS / Transfer)
- date_from        YYYY-MM-DD (local date of sold_at)
- date_to          YYYY-MM-DD
- q                transaction id or item name contains
======================================================
"""

from __future__ import annotations

from datetime import datetime

from django.db.models import Q
from drf_spectacular.utils import extend_schema
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from printing.registry import get_printer
from sales.models import ProductTransaction, Sale
from sales.serializers.sale import ProductTransactionSerializer, SaleSerializer
from sales.services.checkout_orchestrator import (
    PrintStatus,
    print_receipt_for_checkout,
    receipt_from_sale,
)

RECENT_TRANSACTIONS_LIMIT = 100


def _parse_date(s: str):
    try:
        return datetime.strptime(s, "%Y-%m-%d").date()
    except ValueError:
        return None


@extend_schema(tags=["sales"])
class SaleViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = SaleSerializer
    permission_classes = [IsAuthenticated]

    # ======================================================
    # QUERYSET
    # ======================================================

    def get_queryset(self):
        qs = Sale.objects.all().prefetch_related("items").order_by("-sold_at", "-created_at")

        params = self.request.query_params

        pm = (params.get("payment_method") or "").strip()
        if pm:
            qs = qs.filter(payment_method__iexact=pm)

        q = (params.get("q") or "").strip()
        if q:
            qs = qs.filter(Q(transaction_id__icontains=q) | Q(items__name__icontains=q)).distinct()

        date_from = _parse_date((params.get("date_from") or "").strip())
        if date_from:
            qs = qs.filter(sold_at__date__gte=date_from)

        date_to = _parse_date((params.get("date_to") or "").strip())
        if date_to:
            qs = qs.filter(sold_at__date__lte=date_to)

        return qs

    # ======================================================
    # REPRINT
    # POST /api/sales/<id>/reprint/
    # ======================================================

    @extend_schema(
        request=None,
        responses={200: dict},
        description="Send a stored sale's receipt to the receipt printer again.",
    )
    @action(detail=True, methods=["post"], url_path="reprint")
    def reprint(self, request, pk=None):
        sale = self.get_object()

        status = print_receipt_for_checkout(receipt=receipt_from_sale(sale), printer=get_printer())

        return Response(
            {
                "sale_id": str(sale.id),
                "transaction_id": sale.transaction_id,
                "print_status": status.value,
                "can_reprint": status == PrintStatus.FAILED,
            }
        )

    # ======================================================
    # PRODUCT TRANSACTIONS
    # GET /api/sales/transactions/
    # ======================================================

    @extend_schema(
        responses={200: ProductTransactionSerializer(many=True)},
        description="Latest per-line sale records (newest first).",
    )
    @action(detail=False, methods=["get"], url_path="transactions")
    def transactions(self, request):
        qs = ProductTransaction.objects.select_related("sale").order_by("-created_at")[
            :RECENT_TRANSACTIONS_LIMIT
        ]
        return Response(ProductTransactionSerializer(qs, many=True).data)
