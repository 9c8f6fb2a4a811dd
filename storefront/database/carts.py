"""Cart storage backends"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Protocol

from motor.motor_asyncio import AsyncIOMotorClient

from ..core.config import CartBackend, Settings
from ..models.cart import Cart

logger = logging.getLogger(__name__)


class CartStore(Protocol):
    """Persistence capability for carts, keyed by cart id"""

    async def get(self, cart_id: str) -> Optional[Cart]:
        ...

    async def put(self, cart: Cart) -> None:
        ...

    async def delete(self, cart_id: str) -> bool:
        ...

    async def close(self) -> None:
        ...


class InMemoryCartStore:
    """In-memory cart storage"""

    def __init__(self):
        self.carts: dict[str, Cart] = {}

    async def get(self, cart_id: str) -> Optional[Cart]:
        cart = self.carts.get(cart_id)
        return cart.model_copy(deep=True) if cart else None

    async def put(self, cart: Cart) -> None:
        self.carts[cart.cart_id] = cart.model_copy(deep=True)

    async def delete(self, cart_id: str) -> bool:
        return self.carts.pop(cart_id, None) is not None

    async def close(self) -> None:
        pass


class JsonFileCartStore:
    """
    Carts kept in a single JSON document on disk.

    The document maps cart id to the serialized cart. Writes go through a
    temporary file that replaces the original, so a crash mid-write leaves
    the previous contents intact.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error reading cart file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Cart file {self.path} does not hold an object, ignoring it")
            return {}
        return data

    def _write_all(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)

    async def get(self, cart_id: str) -> Optional[Cart]:
        raw = (await asyncio.to_thread(self._read_all)).get(cart_id)
        if raw is None:
            return None
        return Cart.model_validate({**raw, "cart_id": cart_id})

    async def put(self, cart: Cart) -> None:
        data = await asyncio.to_thread(self._read_all)
        data[cart.cart_id] = cart.model_dump(mode="json")
        await asyncio.to_thread(self._write_all, data)

    async def delete(self, cart_id: str) -> bool:
        data = await asyncio.to_thread(self._read_all)
        if cart_id not in data:
            return False
        del data[cart_id]
        await asyncio.to_thread(self._write_all, data)
        return True

    async def close(self) -> None:
        pass


class MongoCartStore:
    """One MongoDB document per cart, ``_id`` being the cart id"""

    def __init__(self, collection, client: Optional[AsyncIOMotorClient] = None):
        self.collection = collection
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoCartStore":
        client = AsyncIOMotorClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
            tz_aware=True,
        )
        collection = client[settings.mongodb_database][settings.mongodb_collection]
        return cls(collection, client=client)

    async def get(self, cart_id: str) -> Optional[Cart]:
        doc = await self.collection.find_one({"_id": cart_id})
        if doc is None:
            return None
        doc["cart_id"] = doc.pop("_id")
        return Cart.model_validate(doc)

    async def put(self, cart: Cart) -> None:
        doc = cart.model_dump(exclude={"cart_id"})
        await self.collection.replace_one({"_id": cart.cart_id}, doc, upsert=True)

    async def delete(self, cart_id: str) -> bool:
        result = await self.collection.delete_one({"_id": cart_id})
        return result.deleted_count > 0

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()


def create_cart_store(settings: Settings) -> CartStore:
    """Build the cart store selected by ``settings.cart_backend``"""
    if settings.cart_backend == CartBackend.FILE:
        logger.info(f"Using JSON file cart store at {settings.cart_file_path}")
        return JsonFileCartStore(settings.cart_file_path)
    if settings.cart_backend == CartBackend.MONGO:
        logger.info(f"Using MongoDB cart store ({settings.mongodb_database}.{settings.mongodb_collection})")
        return MongoCartStore.from_settings(settings)
    logger.info("Using in-memory cart store")
    return InMemoryCartStore()
