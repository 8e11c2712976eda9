import logging
from typing import List, Optional
from datetime import datetime, timezone
from sqlmodel import Session, select

from app.core.exceptions import OrderNotFoundError
from app.models.order import Order, OrderStatus
from app.models.product import Product

logger = logging.getLogger(__name__)


class OrderService:
    def __init__(self, session: Session):
        self.session = session

    def get_user_orders(self, user_id: int) -> List[Order]:
        return self.session.exec(
            select(Order).where(Order.user_id == user_id).order_by(Order.created_at.desc(), Order.id.desc())
        ).all()

    def get_all_orders(self, status: Optional[OrderStatus] = None) -> List[Order]:
        query = select(Order)
        if status:
            query = query.where(Order.status == status)
        return self.session.exec(query.order_by(Order.created_at.desc(), Order.id.desc())).all()

    def get_order(self, order_id: int) -> Order:
        order = self.session.get(Order, order_id)
        if not order:
            raise OrderNotFoundError(order_id)
        return order

    def update_status(self, order_id: int, new_status: OrderStatus) -> Order:
        # Any status may follow any other
        order = self.get_order(order_id)
        previous = order.status

        order.status = new_status
        order.updated_at = datetime.now(timezone.utc)
        self.session.add(order)
        self.session.commit()
        self.session.refresh(order)

        logger.info("Order status updated", extra={
            "order_id": order.id,
            "from_status": previous.value,
            "to_status": new_status.value,
        })
        return order

    def serialize(self, order: Order) -> dict:
        """Order with its items and the products they refer to."""
        items = []
        for item in order.items:
            product = self.session.get(Product, item.product_id) if item.product_id else None
            items.append({
                "id": item.id,
                "product_id": item.product_id,
                "name": product.name if product else "Unknown Product",
                "image_url": product.image_url if product else None,
                "price": str(item.price),
                "quantity": item.quantity,
                "total": str(item.price * item.quantity),
            })

        return {
            "id": order.id,
            "user_id": order.user_id,
            "status": order.status.value,
            "total_amount": str(order.total_amount),
            "shipping_address": order.shipping_address,
            "payment_method": order.payment_method,
            "payment_status": order.payment_status.value,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "items": items,
        }
