# API Routes

from .products import router as products_router
from .cart import router as cart_router
from .health import router as health_router

__all__ = ["products_router", "cart_router", "health_router"]
