from typing import List, Optional
from decimal import Decimal
from datetime import datetime, timezone
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import JSON
from enum import Enum

class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"

class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

class OrderItem(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="order.id", index=True)
    # Cleared when the product is deleted; the copied price is kept
    product_id: Optional[int] = Field(default=None, foreign_key="product.id", ondelete="SET NULL")
    quantity: int
    # Unit price copied from the cart at checkout, not joined from the product
    price: Decimal = Field(max_digits=10, decimal_places=2)

class Order(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    # None for guest checkouts
    user_id: Optional[int] = Field(default=None, foreign_key="user.id", index=True)

    total_amount: Decimal = Field(max_digits=12, decimal_places=2)
    status: OrderStatus = Field(default=OrderStatus.PENDING)

    # Shipping: street, city, state, zip, country
    shipping_address: dict = Field(sa_column=Column(JSON))

    # Payment Info
    payment_method: str
    payment_status: PaymentStatus = Field(default=PaymentStatus.PENDING)

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    items: List["OrderItem"] = Relationship(sa_relationship_kwargs={"cascade": "all, delete-orphan"})
