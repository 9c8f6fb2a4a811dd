"""Storefront API Configuration"""

from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class CartBackend(str, Enum):
    """Where the cart is persisted"""
    MEMORY = "memory"
    FILE = "file"
    MONGO = "mongo"


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Storefront API"
    app_version: str = "3.0.0"
    environment: str = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: list[str] = ["*"]

    # Cart persistence
    cart_backend: CartBackend = CartBackend.MEMORY
    cart_file_path: str = "data/cart.json"

    # MongoDB (carts and products, used when cart_backend == "mongo")
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "ecommerce"
    mongodb_collection: str = "carts"
    mongodb_products_collection: str = "products"
    mongodb_timeout_ms: int = 5000

    # Client
    api_base_url: str = "http://localhost:3001"
    request_timeout: float = 10.0
    max_retries: int = 3
    retry_delay: float = 1.0

    @property
    def database_label(self) -> str:
        """Human readable name of the cart backend"""
        return {
            CartBackend.MEMORY: "In-Memory",
            CartBackend.FILE: "JSON File",
            CartBackend.MONGO: "MongoDB",
        }[self.cart_backend]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
