# products/urls.py

"""
PRODUCTS URLS

- GET /api/products/            active catalog (?category=coffee)
- GET /api/products/<uuid>/     single product
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from products.views.product import ProductViewSet

router = SimpleRouter()
router.register(r"", ProductViewSet, basename="products")

urlpatterns = [
    path("", include(router.urls)),
]
