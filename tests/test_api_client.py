import json

import httpx
import pytest

from storefront.services.api_client import StorefrontAPIError, StorefrontClient


def envelope(data, message="ok"):
    return {"success": True, "data": data, "message": message}


def make_client(handler, max_retries=3):
    return StorefrontClient(
        base_url="http://storefront.test",
        max_retries=max_retries,
        retry_delay=0,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_returns_envelope_data():
    def handler(request):
        assert request.url.path == "/api/products/search"
        assert request.url.params["q"] == "mat"
        return httpx.Response(200, json=envelope([{"id": "8"}]))

    async with make_client(handler) as client:
        assert await client.search_products("mat") == [{"id": "8"}]


@pytest.mark.asyncio
async def test_add_to_cart_sends_item_body():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=envelope({"items": [], "total": 0, "item_count": 0}))

    async with make_client(handler) as client:
        await client.add_to_cart("1", "Headphones", 99.99, quantity=2)

    assert seen["method"] == "POST"
    assert seen["body"] == {"id": "1", "name": "Headphones", "price": 99.99, "quantity": 2}


@pytest.mark.asyncio
async def test_server_errors_are_retried_until_success():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(503, json={"success": False, "message": "busy"})
        return httpx.Response(200, json=envelope({"items": []}))

    async with make_client(handler) as client:
        assert await client.get_cart() == {"items": []}

    assert len(calls) == 3


@pytest.mark.asyncio
async def test_server_errors_give_up_after_max_retries():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500, json={"success": False, "message": "Something went wrong on the server"})

    async with make_client(handler) as client:
        with pytest.raises(StorefrontAPIError) as exc_info:
            await client.get_cart()

    assert len(calls) == 3
    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Internal server error. Please try again later."


@pytest.mark.asyncio
async def test_client_errors_are_not_retried():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(404, json={"success": False, "error": "Item not found in cart", "message": "Item not found in cart"})

    async with make_client(handler) as client:
        with pytest.raises(StorefrontAPIError) as exc_info:
            await client.remove_from_cart("missing")

    assert len(calls) == 1
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Item not found in cart"
    assert exc_info.value.retryable is False


@pytest.mark.asyncio
async def test_client_error_without_message_uses_default():
    def handler(request):
        return httpx.Response(429, text="slow down")

    async with make_client(handler) as client:
        with pytest.raises(StorefrontAPIError) as exc_info:
            await client.get_products()

    assert exc_info.value.message == "Too many requests. Please try again later."


@pytest.mark.asyncio
async def test_network_errors_are_retried():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler, max_retries=2) as client:
        with pytest.raises(StorefrontAPIError) as exc_info:
            await client.get_categories()

    assert len(calls) == 2
    assert exc_info.value.status_code is None
    assert exc_info.value.message == "Network error. Please check your internet connection."


@pytest.mark.asyncio
async def test_health_is_retried_and_returned_unwrapped():
    calls = []

    def handler(request):
        calls.append(request)
        assert request.url.path == "/health"
        if len(calls) == 1:
            return httpx.Response(503, text="starting")
        return httpx.Response(200, json={"status": "OK", "database": "In-Memory"})

    async with make_client(handler) as client:
        assert await client.health() == {"status": "OK", "database": "In-Memory"}

    assert len(calls) == 2


@pytest.mark.asyncio
async def test_health_failures_raise_api_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler, max_retries=2) as client:
        with pytest.raises(StorefrontAPIError) as exc_info:
            await client.health()

    assert exc_info.value.status_code is None
    assert exc_info.value.retryable is True


@pytest.mark.asyncio
async def test_client_against_running_app(app):
    transport = httpx.ASGITransport(app=app)
    async with StorefrontClient(base_url="http://storefront.test", retry_delay=0, transport=transport) as client:
        await client.add_to_cart("3", "Organic Cotton T-Shirt", 29.99, quantity=2)
        cart = await client.update_cart_item("3", 4)
        item = await client.get_cart_item("3")
        cleared = await client.clear_cart()

    assert cart["item_count"] == 4
    assert item["quantity"] == 4
    assert cleared["items"] == []


@pytest.mark.asyncio
async def test_from_settings_uses_configured_base_url(settings):
    client = StorefrontClient.from_settings(settings)

    assert client.base_url == "http://localhost:3001"
    assert client.max_retries == 3
    await client.close()
