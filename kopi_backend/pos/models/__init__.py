"""
PATH: pos/models/__init__.py

POS models export surface.
"""

from .cart import PosCart
from .cart_item import PosCartItem

__all__ = [
    "PosCart",
    "PosCartItem",
]
