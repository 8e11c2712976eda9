import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.exceptions import EmptyCartError, InsufficientStockError, ProductNotFoundError
from app.models.cart import Cart
from app.models.order import Order, OrderItem, OrderStatus, PaymentStatus
from app.models.product import Product
from app.services.cart_store import CartStore

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


class CheckoutService:
    """
    Turns a session cart into an order.

    Order, order items and stock decrements are written in one transaction.
    The cart is cleared only after that commit; if clearing fails the order
    is deleted and the stock restored before the error propagates.
    """

    def __init__(self, session: Session, store: CartStore):
        self.session = session
        self.store = store

    def _reserve_products(self, cart: Cart) -> Dict[int, Product]:
        products = {}
        for product_id, entry in cart.items.items():
            product = self.session.get(Product, product_id)
            if not product:
                raise ProductNotFoundError(product_id)
            if entry.quantity > product.stock_quantity:
                raise InsufficientStockError(product.id, product.name, product.stock_quantity)
            products[product_id] = product
        return products

    def checkout(self, session_id: str, shipping_address: dict, payment_method: str, user_id: Optional[int] = None) -> Order:
        cart = self.store.load(session_id)
        if cart.is_empty():
            raise EmptyCartError(session_id)

        products = self._reserve_products(cart)

        try:
            order = Order(
                user_id=user_id,
                total_amount=cart.total.quantize(CENTS),
                status=OrderStatus.PENDING,
                shipping_address=shipping_address,
                payment_method=payment_method,
                payment_status=PaymentStatus.PENDING,
            )
            self.session.add(order)
            self.session.flush()

            for product_id, entry in cart.items.items():
                self.session.add(OrderItem(
                    order_id=order.id,
                    product_id=product_id,
                    quantity=entry.quantity,
                    price=entry.price,
                ))
                product = products[product_id]
                product.stock_quantity -= entry.quantity
                product.updated_at = datetime.now(timezone.utc)
                self.session.add(product)

            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Checkout failed while writing order", extra={"session_id": session_id})
            raise

        self.session.refresh(order)
        order_id = order.id

        try:
            self.store.clear(session_id)
        except Exception:
            logger.exception("Cart clear failed, reverting order", extra={
                "session_id": session_id,
                "order_id": order_id,
            })
            self._revert(order_id, cart)
            raise

        logger.info("Order placed", extra={
            "session_id": session_id,
            "order_id": order_id,
            "user_id": user_id,
            "total_amount": str(order.total_amount),
            "items_count": len(cart.items),
        })
        return order

    def _revert(self, order_id: int, cart: Cart):
        """Delete a committed order and give its stock back."""
        self.session.rollback()
        for product_id, entry in cart.items.items():
            product = self.session.get(Product, product_id)
            if product:
                product.stock_quantity += entry.quantity
                self.session.add(product)

        order = self.session.get(Order, order_id)
        if order:
            self.session.delete(order)
        self.session.commit()
