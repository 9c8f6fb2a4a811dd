"""
Storefront API Client

HTTP client for the storefront REST API. Server errors and network
failures are retried with exponential backoff; client errors are raised
immediately.
"""

import logging
from typing import Any, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    400: "Bad request. Please check your input.",
    401: "Unauthorized. Please log in again.",
    403: "Access forbidden. You don't have permission for this action.",
    404: "Resource not found.",
    409: "Conflict. This resource already exists.",
    422: "Validation error. Please check your input.",
    429: "Too many requests. Please try again later.",
    500: "Internal server error. Please try again later.",
    502: "Bad gateway. Please try again later.",
    503: "Service unavailable. Please try again later.",
}

# Statuses whose server-provided message is shown to the caller
SERVER_MESSAGE_STATUSES = {400, 404, 409, 422}


class StorefrontAPIError(Exception):
    """Request to the storefront API failed"""

    def __init__(self, status_code: Optional[int], message: str, payload: Optional[dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload or {}

    @property
    def retryable(self) -> bool:
        return self.status_code is None or self.status_code >= 500


def _error_from_response(response: httpx.Response) -> StorefrontAPIError:
    status = response.status_code
    try:
        payload = response.json()
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}

    server_message = payload.get("message")
    if status in SERVER_MESSAGE_STATUSES and server_message:
        message = server_message
    else:
        message = STATUS_MESSAGES.get(status, f"Server error ({status}). Please try again.")
    return StorefrontAPIError(status, message, payload)


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, StorefrontAPIError) and exc.retryable


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        f"Retry attempt {retry_state.attempt_number} after error: {exc}; "
        f"sleeping {retry_state.next_action.sleep if retry_state.next_action else 0:.2f}s"
    )


class StorefrontClient:
    """
    Client for the storefront API.

    Responses are the ``data`` member of the success envelope.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        timeout: float = 10.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize storefront client.

        Args:
            base_url: Base URL of the storefront API
            timeout: Per-request timeout in seconds
            max_retries: Total attempts for retryable failures
            retry_delay: Initial backoff in seconds, doubled after each attempt
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._http_client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings) -> "StorefrontClient":
        return cls(
            base_url=settings.api_base_url,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
            retry_delay=settings.retry_delay,
        )

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def __aenter__(self) -> "StorefrontClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _send(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> dict[str, Any]:
        logger.debug(f"API Request: {method} {path}")
        try:
            response = await self._http_client.request(method, path, json=body, params=params)
        except httpx.TimeoutException as e:
            raise StorefrontAPIError(
                None, "Request timeout. Please check your connection and try again."
            ) from e
        except httpx.TransportError as e:
            raise StorefrontAPIError(
                None, "Network error. Please check your internet connection."
            ) from e

        logger.debug(f"API Response: {response.status_code} {path}")
        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            raise _error_from_response(response)

        return response.json()

    async def _request_raw(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> dict[str, Any]:
        """Make an HTTP request, retrying server and network errors"""
        retrying = AsyncRetrying(
            retry=retry_if_exception(_is_retryable),
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=self.retry_delay, min=self.retry_delay),
            before_sleep=_log_retry,
            reraise=True,
        )
        return await retrying(self._send, method, path, body, params)

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        payload = await self._request_raw(method, path, body, params)
        return payload.get("data")

    # ==================== Product APIs ====================

    async def get_products(
        self,
        category: Optional[str] = None,
        in_stock_only: bool = False,
    ) -> list[dict]:
        """List catalog products, newest first"""
        params: dict[str, Any] = {}
        if category:
            params["category"] = category
        if in_stock_only:
            params["in_stock_only"] = "true"
        return await self._request("GET", "/api/products", params=params)

    async def get_product(self, product_id: str) -> dict:
        """Get product details"""
        return await self._request("GET", f"/api/products/{product_id}")

    async def get_categories(self) -> list[str]:
        """Get available product categories"""
        return await self._request("GET", "/api/products/categories")

    async def search_products(self, query: str) -> list[dict]:
        """Search products by name, description or category"""
        return await self._request("GET", "/api/products/search", params={"q": query})

    # ==================== Cart APIs ====================

    async def get_cart(self) -> dict:
        """Get the cart"""
        return await self._request("GET", "/api/cart")

    async def get_cart_item(self, item_id: str) -> dict:
        """Get a single cart line"""
        return await self._request("GET", f"/api/cart/{item_id}")

    async def add_to_cart(
        self,
        item_id: str,
        name: str,
        price: float,
        quantity: int = 1,
        image: Optional[str] = None,
    ) -> dict:
        """Add item to cart"""
        body: dict[str, Any] = {"id": item_id, "name": name, "price": price, "quantity": quantity}
        if image:
            body["image"] = image
        return await self._request("POST", "/api/cart", body=body)

    async def update_cart_item(self, item_id: str, quantity: int) -> dict:
        """Update item quantity in cart"""
        return await self._request("PUT", f"/api/cart/{item_id}", body={"quantity": quantity})

    async def remove_from_cart(self, item_id: str) -> dict:
        """Remove item from cart"""
        return await self._request("DELETE", f"/api/cart/{item_id}")

    async def clear_cart(self) -> dict:
        """Remove every item from the cart"""
        return await self._request("DELETE", "/api/cart")

    # ==================== Service APIs ====================

    async def health(self) -> dict:
        """Service health; returned as-is since it has no envelope"""
        return await self._request_raw("GET", "/health")
