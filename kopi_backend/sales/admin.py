# sales/admin.py

from django.contrib import admin

from sales.models import ProductTransaction, Sale, SaleItem


# ======================================================
# SALE ADMIN
# ======================================================


class SaleItemInline(admin.TabularInline):
    model = SaleItem
    extra = 0
    can_delete = False
    readonly_fields = ("product", "name", "quantity", "unit_price", "subtotal")


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = (
        "transaction_id",
        "sold_at",
        "payment_method",
        "total_amount",
        "employee_name",
    )
    readonly_fields = (
        "transaction_id",
        "sold_at",
        "subtotal_amount",
        "discount_amount",
        "total_amount",
        "created_at",
    )
    search_fields = ("transaction_id", "employee_name")
    list_filter = ("payment_method", "sold_at")
    inlines = [SaleItemInline]


# ======================================================
# PRODUCT TRANSACTION ADMIN
# ======================================================


@admin.register(ProductTransaction)
class ProductTransactionAdmin(admin.ModelAdmin):
    list_display = ("product_name", "quantity_sold", "line_total", "type", "employee_name", "created_at")
    search_fields = ("product_name",)
    list_filter = ("type", "created_at")
