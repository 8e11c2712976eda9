# Import all models to register them with SQLModel
from app.models.user import User
from app.models.product import Product
from app.models.order import Order, OrderItem, OrderStatus, PaymentStatus
from app.models.cart import CartSession, Cart, CartEntry, ProductSnapshot

__all__ = [
    "User",
    "Product",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PaymentStatus",
    "CartSession",
    "Cart",
    "CartEntry",
    "ProductSnapshot",
]
