import pytest
from fastapi.testclient import TestClient

from storefront.core.config import CartBackend, Settings
from storefront.database.carts import InMemoryCartStore
from storefront.main import create_app
from storefront.models.cart import CartItem
from storefront.services.cart_service import CartService


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        app_name="Test Storefront",
        environment="test",
        cart_backend=CartBackend.MEMORY,
        cart_file_path=str(tmp_path / "data" / "cart.json"),
    )


@pytest.fixture
def store():
    return InMemoryCartStore()


@pytest.fixture
def service(store):
    return CartService(store)


@pytest.fixture
def app(settings, store):
    return create_app(settings, cart_store=store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def headphones():
    return CartItem(id="1", name="Wireless Bluetooth Headphones", price=99.99, quantity=1)


@pytest.fixture
def tshirt():
    return CartItem(id="3", name="Organic Cotton T-Shirt", price=29.99, quantity=2, image="https://example.com/shirt.jpg")
