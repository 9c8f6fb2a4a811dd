# Core configuration and errors

from .config import CartBackend, Settings, get_settings
from .errors import (
    CartItemNotFound,
    CartValidationError,
    InvalidRequest,
    ProductNotFound,
    StorefrontError,
    register_error_handlers,
)

__all__ = [
    "CartBackend",
    "Settings",
    "get_settings",
    "CartItemNotFound",
    "CartValidationError",
    "InvalidRequest",
    "ProductNotFound",
    "StorefrontError",
    "register_error_handlers",
]
