"""
Storefront API Application

REST backend for the storefront: a product catalog and a single shared
shopping cart persisted in memory, in a JSON file or in MongoDB.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from .core.config import Settings, get_settings
from .core.errors import register_error_handlers
from .database.carts import CartStore, create_cart_store
from .database.products import ProductCatalog, create_product_catalog
from .routes import cart_router, health_router, products_router
from .services.cart_service import CartService

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    cart_store: Optional[CartStore] = None,
    product_catalog: Optional[ProductCatalog] = None,
) -> FastAPI:
    """Build the application around the given settings, cart store and catalog"""
    app_settings = app_settings or settings
    store = cart_store if cart_store is not None else create_cart_store(app_settings)
    catalog = product_catalog if product_catalog is not None else create_product_catalog(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        logger.info(f"{app_settings.app_name} starting up...")
        logger.info(f"Cart backend: {app_settings.database_label}")
        yield
        logger.info(f"{app_settings.app_name} shutting down...")
        await store.close()
        await catalog.close()

    app = FastAPI(
        title=app_settings.app_name,
        description="Product catalog and shopping cart API",
        version=app_settings.app_version,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.cart_service = CartService(store)
    app.state.product_catalog = catalog
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app, debug=app_settings.debug)

    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(cart_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
