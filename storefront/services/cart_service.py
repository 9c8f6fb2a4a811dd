"""
Cart Service

Read-modify-write operations on the shared cart. Every mutation loads the
cart from the store, applies the change, refreshes ``updated_at`` and
writes it back; totals are derived from the items on each read.
"""

import asyncio
import logging

from ..core.errors import CartItemNotFound, CartValidationError
from ..database.carts import CartStore
from ..models.cart import MAX_ITEM_QUANTITY, Cart, CartItem

logger = logging.getLogger(__name__)

DEFAULT_CART_ID = "default"


def validate_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise CartValidationError("Quantity must be a whole number")
    if quantity <= 0:
        raise CartValidationError("Quantity must be a positive number")
    if quantity > MAX_ITEM_QUANTITY:
        raise CartValidationError(f"Quantity cannot exceed {MAX_ITEM_QUANTITY}")


def validate_item(item: CartItem) -> None:
    errors = []
    if not item.id:
        errors.append("Item ID is required")
    if not item.name:
        errors.append("Item name is required")
    if item.price <= 0:
        errors.append("Item price must be a positive number")
    try:
        validate_quantity(item.quantity)
    except CartValidationError as e:
        errors.append(e.message)

    if errors:
        raise CartValidationError("Invalid cart item data", {"validation_errors": errors})


class CartService:
    """Cart operations against an injected cart store"""

    def __init__(self, store: CartStore, cart_id: str = DEFAULT_CART_ID):
        self.store = store
        self.cart_id = cart_id
        self._lock = asyncio.Lock()

    async def _load(self) -> Cart:
        cart = await self.store.get(self.cart_id)
        if cart is None:
            cart = Cart(cart_id=self.cart_id)
            await self.store.put(cart)
            logger.info(f"Created empty cart '{self.cart_id}'")
        return cart

    async def _save(self, cart: Cart) -> Cart:
        cart.touch()
        await self.store.put(cart)
        return cart

    async def get(self) -> Cart:
        """Get the cart, creating it on first access"""
        async with self._lock:
            return await self._load()

    async def get_item(self, item_id: str) -> CartItem:
        async with self._lock:
            cart = await self._load()
        item = cart.find_item(item_id)
        if item is None:
            raise CartItemNotFound(item_id)
        return item

    async def add(self, item: CartItem) -> Cart:
        """
        Add an item, merging by id.

        An existing line keeps its name, price and image and has its
        quantity increased; the combined quantity may not exceed the
        per-item ceiling.
        """
        validate_item(item)

        async with self._lock:
            cart = await self._load()
            existing_item = cart.find_item(item.id)

            if existing_item:
                new_quantity = existing_item.quantity + item.quantity
                if new_quantity > MAX_ITEM_QUANTITY:
                    raise CartValidationError(
                        f"Total quantity cannot exceed {MAX_ITEM_QUANTITY} for a single item",
                        {"id": item.id, "in_cart": existing_item.quantity, "requested": item.quantity},
                    )
                existing_item.quantity = new_quantity
            else:
                cart.items.append(item.model_copy())

            logger.debug(f"Added {item.quantity}x {item.id} to cart '{self.cart_id}'")
            return await self._save(cart)

    async def update(self, item_id: str, quantity: int) -> Cart:
        """Set the quantity of an existing line"""
        validate_quantity(quantity)

        async with self._lock:
            cart = await self._load()
            item = cart.find_item(item_id)
            if item is None:
                raise CartItemNotFound(item_id)

            item.quantity = quantity
            logger.debug(f"Set {item_id} quantity to {quantity} in cart '{self.cart_id}'")
            return await self._save(cart)

    async def remove(self, item_id: str) -> Cart:
        """Remove the line with the given id"""
        async with self._lock:
            cart = await self._load()
            if cart.find_item(item_id) is None:
                raise CartItemNotFound(item_id)

            cart.items = [i for i in cart.items if i.id != item_id]
            logger.debug(f"Removed {item_id} from cart '{self.cart_id}'")
            return await self._save(cart)

    async def clear(self) -> Cart:
        """Clear all items from cart"""
        async with self._lock:
            cart = await self._load()
            cart.items = []
            logger.debug(f"Cleared cart '{self.cart_id}'")
            return await self._save(cart)
