# sales/serializers/sale.py

from rest_framework import serializers

from sales.models import ProductTransaction, Sale, SaleItem


class SaleItemSerializer(serializers.ModelSerializer):
    """
    Sale line item serializer (read-only).
    Designed for receipts + UI display.
    """

    class Meta:
        model = SaleItem
        fields = [
            "id",
            "product",
            "name",
            "quantity",
            "unit_price",
            "subtotal",
        ]
        read_only_fields = fields


class SaleSerializer(serializers.ModelSerializer):
    items = SaleItemSerializer(many=True, read_only=True)
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = Sale
        fields = [
            "id",
            "transaction_id",
            "sold_at",
            "subtotal_amount",
            "discount_name",
            "discount_amount",
            "total_amount",
            "payment_method",
            "employee",
            "employee_name",
            "item_count",
            "items",
            "created_at",
        ]
        read_only_fields = fields

    def get_item_count(self, obj) -> int:
        return sum(item.quantity for item in obj.items.all())


class ProductTransactionSerializer(serializers.ModelSerializer):
    transaction_id = serializers.CharField(source="sale.transaction_id", read_only=True)

    class Meta:
        model = ProductTransaction
        fields = [
            "id",
            "sale",
            "transaction_id",
            "product",
            "product_name",
            "quantity_sold",
            "line_total",
            "type",
            "employee_name",
            "created_at",
        ]
        read_only_fields = fields
