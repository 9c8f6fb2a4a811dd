"""Storefront exceptions and their HTTP mapping"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class StorefrontError(Exception):
    """Base class for all storefront errors"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidRequest(StorefrontError):
    """Client sent something the API cannot act on"""

    status_code = status.HTTP_400_BAD_REQUEST


class CartValidationError(InvalidRequest):
    """Cart item or quantity failed validation"""


class CartItemNotFound(StorefrontError):
    """No cart line with the requested id"""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, item_id: str):
        super().__init__("Item not found in cart", {"id": item_id})


class ProductNotFound(StorefrontError):
    """No catalog entry with the requested id"""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, product_id: str):
        super().__init__("Product not found", {"id": product_id})


def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Any] = None,
) -> JSONResponse:
    """Build the failure envelope"""
    content: dict[str, Any] = {
        "success": False,
        "error": error,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if details is not None:
        content["details"] = jsonable_encoder(details)
    return JSONResponse(status_code=status_code, content=content)


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    return error_response(exc.status_code, exc.message, exc.message, exc.details)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request body or query failed validation"""
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Invalid request data",
        "; ".join(f"{e['field']}: {e['message']}" for e in errors),
        {"validation_errors": errors},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return error_response(
            exc.status_code,
            "Route not found",
            f"The requested route {request.url.path} does not exist",
            {
                "available_endpoints": {
                    "health": "/health",
                    "products": "/api/products",
                    "cart": "/api/cart",
                }
            },
        )
    return error_response(exc.status_code, str(exc.detail), str(exc.detail))


def create_unhandled_error_handler(debug: bool):
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            str(exc) if debug else "Something went wrong on the server",
        )

    return unhandled_error_handler


def register_error_handlers(app: FastAPI, debug: bool = False) -> None:
    """Attach envelope-producing handlers to the app"""
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, create_unhandled_error_handler(debug))
