# Services

from .cart_service import CartService, DEFAULT_CART_ID
from .api_client import StorefrontClient, StorefrontAPIError

__all__ = ["CartService", "DEFAULT_CART_ID", "StorefrontClient", "StorefrontAPIError"]
