from typing import Optional
from decimal import Decimal
from datetime import datetime, timezone
from sqlmodel import Field, SQLModel

class Product(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    # Basic Info
    name: str = Field(index=True, max_length=255)
    description: str
    category: Optional[str] = Field(default=None, index=True, max_length=255)
    image_url: Optional[str] = None

    # Pricing
    price: Decimal = Field(max_digits=10, decimal_places=2, ge=0)

    # Inventory
    stock_quantity: int = Field(default=0, ge=0)

    # Metadata
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
