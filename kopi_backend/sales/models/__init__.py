# sales/models/__init__.py

"""
SALES MODELS PACKAGE EXPORTS
"""

from .product_transaction import ProductTransaction
from .sale import Sale
from .sale_item import SaleItem

__all__ = [
    "Sale",
    "SaleItem",
    "ProductTransaction",
]
