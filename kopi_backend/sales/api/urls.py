# sales/api/urls.py

"""
SALES API URLS

Provides:
- GET  /api/sales/                   sales history (filters: payment_method, date_from, date_to, q)
- GET  /api/sales/<uuid>/            single sale with items
- POST /api/sales/<uuid>/reprint/    reprint receipt
- GET  /api/sales/transactions/      latest ProductTransaction rows

NOTE:
- Checkout lives in the POS app (/api/pos/checkout/) since it consumes the stored POS cart.
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from sales.api.viewsets.sale import SaleViewSet

router = SimpleRouter()
router.register(r"", SaleViewSet, basename="sales")

urlpatterns = [
    path("", include(router.urls)),
]
