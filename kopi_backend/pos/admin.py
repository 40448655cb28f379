from django.contrib import admin

from .models import PosCart, PosCartItem

# =====================================================
# CART ITEM INLINE (READ-ONLY)
# =====================================================


class PosCartItemInline(admin.TabularInline):
    model = PosCartItem
    extra = 0
    can_delete = False
    readonly_fields = (
        "product",
        "name",
        "quantity",
        "unit_price",
        "line_total",
        "created_at",
    )

    def has_add_permission(self, request, obj=None):
        return False


# =====================================================
# CART ADMIN
# =====================================================


@admin.register(PosCart)
class PosCartAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "is_active", "created_at", "updated_at")
    readonly_fields = ("id", "user", "is_active", "created_at", "updated_at")
    search_fields = ("user__username",)
    list_filter = ("is_active", "created_at")

    inlines = [PosCartItemInline]
