"""Cart models for the storefront"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, computed_field

MAX_ITEM_QUANTITY = 100


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CartItem(BaseModel):
    """Item in a shopping cart, keyed by product id"""
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    price: float = Field(gt=0)
    quantity: int = Field(ge=1, le=MAX_ITEM_QUANTITY)
    image: Optional[str] = None

    @computed_field
    @property
    def line_total(self) -> float:
        return round(self.price * self.quantity, 2)


class Cart(BaseModel):
    """
    Shopping cart.

    ``total`` and ``item_count`` are always derived from ``items``; values
    found in stored documents are ignored on load.
    """
    cart_id: str = "default"
    items: list[CartItem] = Field(default_factory=list)
    updated_at: datetime = Field(default_factory=utcnow)

    @computed_field
    @property
    def total(self) -> float:
        return round(sum(item.price * item.quantity for item in self.items), 2)

    @computed_field
    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def find_item(self, item_id: str) -> Optional[CartItem]:
        return next((item for item in self.items if item.id == item_id), None)

    def touch(self) -> None:
        self.updated_at = utcnow()


class AddToCartRequest(BaseModel):
    """Request to add item to cart"""
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    price: float = Field(gt=0)
    quantity: int = Field(default=1, ge=1, le=MAX_ITEM_QUANTITY)
    image: Optional[str] = None


class UpdateCartItemRequest(BaseModel):
    """Request to update cart item quantity"""
    quantity: int = Field(ge=1, le=MAX_ITEM_QUANTITY)
