# Database modules

from .products import (
    InMemoryProductCatalog,
    MongoProductCatalog,
    ProductCatalog,
    create_product_catalog,
)
from .carts import (
    CartStore,
    InMemoryCartStore,
    JsonFileCartStore,
    MongoCartStore,
    create_cart_store,
)

__all__ = [
    "ProductCatalog",
    "InMemoryProductCatalog",
    "MongoProductCatalog",
    "create_product_catalog",
    "CartStore",
    "InMemoryCartStore",
    "JsonFileCartStore",
    "MongoCartStore",
    "create_cart_store",
]
