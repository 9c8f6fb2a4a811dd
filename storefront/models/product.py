"""Product models for the storefront"""

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field, computed_field

NEW_PRODUCT_WINDOW = timedelta(days=10)


class Product(BaseModel):
    """Product in the catalog"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    price: float = Field(gt=0)
    image: str
    description: str
    category: str
    rating: float = Field(ge=0, le=5, default=0)
    in_stock: bool = True
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def is_new(self) -> bool:
        """Created within the last ten days"""
        return self.created_at > datetime.now(timezone.utc) - NEW_PRODUCT_WINDOW
