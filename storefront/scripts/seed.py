"""
Seed the MongoDB product catalog.

Clears the products and carts collections, then inserts the seed products
that the in-memory catalog serves.

Usage:
    storefront-seed
    python -m storefront.scripts.seed
"""

import asyncio
import logging

from dotenv import load_dotenv
from motor.motor_asyncio import AsyncIOMotorClient

from ..core.config import Settings, get_settings
from ..database.products import PRODUCTS, product_to_document

logger = logging.getLogger(__name__)


async def seed_products(products_collection, carts_collection=None) -> int:
    """
    Replace the contents of the products collection with the seed products.

    Returns:
        Number of products inserted
    """
    await products_collection.delete_many({})
    if carts_collection is not None:
        await carts_collection.delete_many({})
    logger.info("Cleared existing data")

    docs = [product_to_document(product) for product in PRODUCTS.values()]
    result = await products_collection.insert_many(docs)
    logger.info(f"Inserted {len(result.inserted_ids)} products")
    return len(result.inserted_ids)


async def seed_database(settings: Settings) -> int:
    client = AsyncIOMotorClient(
        settings.mongodb_uri,
        serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        tz_aware=True,
    )
    try:
        db = client[settings.mongodb_database]
        return await seed_products(
            db[settings.mongodb_products_collection],
            db[settings.mongodb_collection],
        )
    finally:
        client.close()


def main():
    load_dotenv()
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    print("=" * 60)
    print(f"Seeding {settings.mongodb_database} at {settings.mongodb_uri}")
    print("=" * 60)

    count = asyncio.run(seed_database(settings))

    print(f"\nDatabase seeded with {count} products.")


if __name__ == "__main__":
    main()
