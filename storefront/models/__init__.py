# Storefront Models

from .cart import Cart, CartItem, AddToCartRequest, UpdateCartItemRequest, MAX_ITEM_QUANTITY
from .common import APIResponse, ListResponse
from .product import Product

__all__ = [
    "Cart",
    "CartItem",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "MAX_ITEM_QUANTITY",
    "APIResponse",
    "ListResponse",
    "Product",
]
