"""Product catalog: seed data, in-memory and MongoDB backends"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Optional, Protocol

from motor.motor_asyncio import AsyncIOMotorClient

from ..core.config import CartBackend, Settings
from ..models.product import Product

logger = logging.getLogger(__name__)


def _seeded(day: int) -> datetime:
    return datetime(2024, 1, day, tzinfo=timezone.utc)


def _image(photo: str) -> str:
    return f"https://images.unsplash.com/{photo}?w=400&h=400&fit=crop&crop=center"


PRODUCTS: dict[str, Product] = {
    p.id: p
    for p in [
        Product(
            id="1",
            name="Wireless Bluetooth Headphones",
            price=99.99,
            image=_image("photo-1505740420928-5e560c06d30e"),
            description="High-quality wireless headphones with noise cancellation technology. Perfect for music lovers and professionals.",
            category="Electronics",
            rating=4.5,
            created_at=_seeded(15),
            updated_at=_seeded(15),
        ),
        Product(
            id="2",
            name="Smart Fitness Watch",
            price=199.99,
            image=_image("photo-1523275335684-37898b6baf30"),
            description="Advanced fitness tracking with heart rate monitor, GPS, and smartphone connectivity.",
            category="Electronics",
            rating=4.8,
            created_at=_seeded(16),
            updated_at=_seeded(16),
        ),
        Product(
            id="3",
            name="Organic Cotton T-Shirt",
            price=29.99,
            image=_image("photo-1521572163474-6864f9cf17ab"),
            description="Comfortable and eco-friendly cotton t-shirt made from 100% organic materials.",
            category="Clothing",
            rating=4.2,
            created_at=_seeded(17),
            updated_at=_seeded(17),
        ),
        Product(
            id="4",
            name="Stainless Steel Water Bottle",
            price=24.99,
            image=_image("photo-1602143407151-7111542de6e8"),
            description="Insulated stainless steel water bottle that keeps drinks cold for 24 hours or hot for 12 hours.",
            category="Home & Garden",
            rating=4.6,
            in_stock=False,
            created_at=_seeded(18),
            updated_at=_seeded(18),
        ),
        Product(
            id="5",
            name="Wireless Charging Pad",
            price=49.99,
            image=_image("photo-1586953208448-b95a79798f07"),
            description="Fast wireless charging pad compatible with all Qi-enabled devices. Sleek design for any desk setup.",
            category="Electronics",
            rating=4.3,
            created_at=_seeded(19),
            updated_at=_seeded(19),
        ),
        Product(
            id="6",
            name="Leather Wallet",
            price=39.99,
            image=_image("photo-1627123424574-724758594e93"),
            description="Genuine leather wallet with multiple card slots, coin pocket, and RFID protection.",
            category="Accessories",
            rating=4.7,
            created_at=_seeded(20),
            updated_at=_seeded(20),
        ),
        Product(
            id="7",
            name="Portable Bluetooth Speaker",
            price=79.99,
            image=_image("photo-1608043152269-423dbba4e7e1"),
            description="Waterproof portable speaker with 20-hour battery life and 360-degree sound.",
            category="Electronics",
            rating=4.4,
            created_at=_seeded(21),
            updated_at=_seeded(21),
        ),
        Product(
            id="8",
            name="Yoga Mat",
            price=34.99,
            image=_image("photo-1544367567-0f2fcb009e0b"),
            description="Non-slip yoga mat made from eco-friendly materials. Perfect thickness for comfort and stability.",
            category="Sports & Fitness",
            rating=4.1,
            created_at=_seeded(22),
            updated_at=_seeded(22),
        ),
        Product(
            id="9",
            name="Coffee Maker",
            price=89.99,
            image=_image("photo-1517668808822-9ebb02f2a0e6"),
            description="Programmable coffee maker with thermal carafe and built-in grinder for fresh coffee every morning.",
            category="Home & Garden",
            rating=4.5,
            created_at=_seeded(23),
            updated_at=_seeded(23),
        ),
        Product(
            id="10",
            name="Running Shoes",
            price=129.99,
            image=_image("photo-1542291026-7eec264c27ff"),
            description="Lightweight running shoes with superior cushioning and breathable mesh upper.",
            category="Sports & Fitness",
            rating=4.6,
            created_at=_seeded(24),
            updated_at=_seeded(24),
        ),
    ]
}


class ProductCatalog(Protocol):
    """Read access to the product catalog"""

    async def get_product(self, product_id: str) -> Optional[Product]:
        ...

    async def list_products(self, category: Optional[str] = None, in_stock_only: bool = False) -> list[Product]:
        ...

    async def categories(self) -> list[str]:
        ...

    async def search(self, query: str) -> list[Product]:
        ...

    async def close(self) -> None:
        ...


class InMemoryProductCatalog:
    """Product catalog backed by the seed data"""

    def __init__(self, products: Optional[dict[str, Product]] = None):
        self.products = dict(PRODUCTS if products is None else products)

    def _newest_first(self, products: list[Product]) -> list[Product]:
        return sorted(products, key=lambda p: p.created_at, reverse=True)

    async def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID"""
        return self.products.get(product_id)

    async def list_products(
        self,
        category: Optional[str] = None,
        in_stock_only: bool = False,
    ) -> list[Product]:
        """List products, newest first"""
        results = list(self.products.values())

        if category:
            category_lower = category.lower()
            results = [p for p in results if p.category.lower() == category_lower]

        if in_stock_only:
            results = [p for p in results if p.in_stock]

        return self._newest_first(results)

    async def categories(self) -> list[str]:
        """Distinct product categories"""
        return sorted({p.category for p in self.products.values()})

    async def search(self, query: str) -> list[Product]:
        """
        Case-insensitive search over name, description and category.

        Returns:
            Matching products, newest first
        """
        query_lower = query.strip().lower()
        results = [
            p for p in self.products.values()
            if query_lower in p.name.lower()
            or query_lower in p.description.lower()
            or query_lower in p.category.lower()
        ]
        return self._newest_first(results)

    async def close(self) -> None:
        pass


def product_to_document(product: Product) -> dict[str, Any]:
    """Stored form of a product, ``_id`` being the product id"""
    doc = product.model_dump(exclude={"id", "is_new"})
    doc["_id"] = product.id
    return doc


def _contains(text: str) -> dict[str, str]:
    return {"$regex": re.escape(text), "$options": "i"}


class MongoProductCatalog:
    """Products read from a MongoDB collection filled by the seed script"""

    def __init__(self, collection, client: Optional[AsyncIOMotorClient] = None):
        self.collection = collection
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoProductCatalog":
        client = AsyncIOMotorClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
            tz_aware=True,
        )
        collection = client[settings.mongodb_database][settings.mongodb_products_collection]
        return cls(collection, client=client)

    @staticmethod
    def _to_product(doc: dict[str, Any]) -> Product:
        doc["id"] = str(doc.pop("_id"))
        return Product.model_validate(doc)

    async def _find(self, query: dict[str, Any]) -> list[Product]:
        cursor = self.collection.find(query).sort("created_at", -1)
        return [self._to_product(doc) for doc in await cursor.to_list(length=None)]

    async def get_product(self, product_id: str) -> Optional[Product]:
        doc = await self.collection.find_one({"_id": product_id})
        return self._to_product(doc) if doc is not None else None

    async def list_products(
        self,
        category: Optional[str] = None,
        in_stock_only: bool = False,
    ) -> list[Product]:
        query: dict[str, Any] = {}
        if category:
            query["category"] = {"$regex": f"^{re.escape(category)}$", "$options": "i"}
        if in_stock_only:
            query["in_stock"] = True
        return await self._find(query)

    async def categories(self) -> list[str]:
        return sorted(await self.collection.distinct("category"))

    async def search(self, query: str) -> list[Product]:
        pattern = _contains(query.strip())
        return await self._find({
            "$or": [
                {"name": pattern},
                {"description": pattern},
                {"category": pattern},
            ]
        })

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()


def create_product_catalog(settings: Settings) -> ProductCatalog:
    """Products come from MongoDB when it is the selected backend"""
    if settings.cart_backend == CartBackend.MONGO:
        logger.info(
            f"Using MongoDB product catalog "
            f"({settings.mongodb_database}.{settings.mongodb_products_collection})"
        )
        return MongoProductCatalog.from_settings(settings)
    logger.info("Using in-memory product catalog")
    return InMemoryProductCatalog()
