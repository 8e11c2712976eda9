from typing import Dict, Optional
from decimal import Decimal
from datetime import datetime, timezone
from pydantic import BaseModel, computed_field
from pydantic import Field as ModelField
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import JSON

CART_PAYLOAD_VERSION = 2

class CartSession(SQLModel, table=True):
    """Serialized cart of one browser session."""
    session_id: str = Field(primary_key=True, max_length=64)
    payload: dict = Field(default={}, sa_column=Column(JSON))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class ProductSnapshot(BaseModel):
    id: int
    name: str
    description: str
    price: Decimal
    image_url: Optional[str] = None
    stock_quantity: int
    category: Optional[str] = None

class CartEntry(BaseModel):
    product: ProductSnapshot
    quantity: int = ModelField(ge=1)
    # Unit price captured when the product was first added
    price: Decimal

    @computed_field
    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity

class Cart(BaseModel):
    items: Dict[int, CartEntry] = ModelField(default_factory=dict)

    @computed_field
    @property
    def total(self) -> Decimal:
        return sum((entry.subtotal for entry in self.items.values()), Decimal("0"))

    @computed_field
    @property
    def count(self) -> int:
        return sum(entry.quantity for entry in self.items.values())

    def is_empty(self) -> bool:
        return not self.items
