# products/serializers/product.py

"""
PRODUCT SERIALIZER

Purpose:
- Catalog payload for the POS product grid.
- unit_price is server-resolved (flat price or cheapest variant).
"""

from rest_framework import serializers

from products.models import Product, ProductVariant


class ProductVariantSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductVariant
        fields = ["id", "size", "price"]
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    variants = ProductVariantSerializer(many=True, read_only=True)
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "code",
            "name",
            "category",
            "subcategory",
            "price",
            "unit_price",
            "variants",
            "description",
            "is_active",
        ]
        read_only_fields = fields
