"""Cart API routes"""

from fastapi import APIRouter, Depends, Request

from ..models.cart import AddToCartRequest, Cart, CartItem, UpdateCartItemRequest
from ..models.common import APIResponse
from ..services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def get_cart_service(request: Request) -> CartService:
    """Cart service attached to the running app"""
    return request.app.state.cart_service


@router.get("", response_model=APIResponse[Cart])
async def get_cart(service: CartService = Depends(get_cart_service)):
    """Get the cart"""
    cart = await service.get()
    return APIResponse[Cart](data=cart, message="Cart retrieved successfully")


@router.post("", response_model=APIResponse[Cart])
async def add_to_cart(
    request: AddToCartRequest,
    service: CartService = Depends(get_cart_service),
):
    """Add an item to the cart, merging quantities for an existing id"""
    cart = await service.add(CartItem(**request.model_dump()))
    return APIResponse[Cart](data=cart, message="Item added to cart successfully")


@router.delete("", response_model=APIResponse[Cart])
async def clear_cart(service: CartService = Depends(get_cart_service)):
    """Clear all items from cart"""
    cart = await service.clear()
    return APIResponse[Cart](data=cart, message="Cart cleared successfully")


@router.get("/{item_id}", response_model=APIResponse[CartItem])
async def get_cart_item(item_id: str, service: CartService = Depends(get_cart_service)):
    """Get a single cart line"""
    item = await service.get_item(item_id)
    return APIResponse[CartItem](data=item, message="Cart item retrieved successfully")


@router.put("/{item_id}", response_model=APIResponse[Cart])
async def update_cart_item(
    item_id: str,
    request: UpdateCartItemRequest,
    service: CartService = Depends(get_cart_service),
):
    """Update item quantity in cart"""
    cart = await service.update(item_id, request.quantity)
    return APIResponse[Cart](data=cart, message="Cart item updated successfully")


@router.delete("/{item_id}", response_model=APIResponse[Cart])
async def remove_from_cart(item_id: str, service: CartService = Depends(get_cart_service)):
    """Remove an item from the cart"""
    cart = await service.remove(item_id)
    return APIResponse[Cart](data=cart, message="Item removed from cart successfully")
