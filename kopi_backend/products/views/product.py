# products/views/product.py

"""
PRODUCT CATALOG VIEWSET

Purpose:
- Read-only catalog for the POS product grid.
- Only active products are listed.
"""

from drf_spectacular.utils import extend_schema
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from products.models import Product
from products.serializers.product import ProductSerializer


@extend_schema(tags=["products"])
class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = ProductSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["category"]
    pagination_class = None

    def get_queryset(self):
        return Product.objects.filter(is_active=True).prefetch_related("variants")
