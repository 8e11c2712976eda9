import logging
from sqlmodel import Session

from app.core.exceptions import (
    CartItemNotFoundError,
    InsufficientStockError,
    InvalidCouponError,
    ProductNotFoundError,
    ProductUnavailableError,
)
from app.models.cart import Cart, CartEntry, ProductSnapshot
from app.models.product import Product
from app.services.cart_store import CartStore

logger = logging.getLogger(__name__)


def snapshot_product(product: Product) -> ProductSnapshot:
    return ProductSnapshot(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        image_url=product.image_url,
        stock_quantity=product.stock_quantity,
        category=product.category,
    )


class CartService:
    """Cart operations for a single session."""

    def __init__(self, session: Session, store: CartStore, session_id: str):
        self.session = session
        self.store = store
        self.session_id = session_id

    def get_cart(self) -> Cart:
        return self.store.load(self.session_id)

    def _get_product(self, product_id: int) -> Product:
        product = self.session.get(Product, product_id)
        if not product:
            raise ProductNotFoundError(product_id)
        return product

    def _check_stock(self, product: Product, quantity: int):
        if quantity > product.stock_quantity:
            raise InsufficientStockError(product.id, product.name, product.stock_quantity)

    def add(self, product_id: int, quantity: int = 1) -> Cart:
        """Add a product, incrementing the quantity when it is already in the cart."""
        product = self._get_product(product_id)
        if not product.is_active:
            raise ProductUnavailableError(product.id, product.name)

        cart = self.get_cart()
        entry = cart.items.get(product_id)
        if entry:
            new_quantity = entry.quantity + quantity
            self._check_stock(product, new_quantity)
            entry.quantity = new_quantity
        else:
            self._check_stock(product, quantity)
            cart.items[product_id] = CartEntry(
                product=snapshot_product(product),
                quantity=quantity,
                price=product.price,
            )

        self.store.save(self.session_id, cart)
        logger.info("Added product to cart", extra={
            "session_id": self.session_id,
            "product_id": product_id,
            "quantity": cart.items[product_id].quantity,
        })
        return cart

    def update(self, product_id: int, quantity: int) -> Cart:
        """Overwrite a quantity; zero or less removes the entry."""
        cart = self.get_cart()
        entry = cart.items.get(product_id)
        if entry is None:
            raise CartItemNotFoundError(product_id)

        if quantity <= 0:
            del cart.items[product_id]
        else:
            self._check_stock(self._get_product(product_id), quantity)
            entry.quantity = quantity

        self.store.save(self.session_id, cart)
        logger.info("Updated cart quantity", extra={
            "session_id": self.session_id,
            "product_id": product_id,
            "quantity": max(quantity, 0),
        })
        return cart

    def remove(self, product_id: int) -> Cart:
        cart = self.get_cart()
        if cart.items.pop(product_id, None) is not None:
            self.store.save(self.session_id, cart)
            logger.info("Removed product from cart", extra={
                "session_id": self.session_id,
                "product_id": product_id,
            })
        return cart

    def clear(self):
        self.store.clear(self.session_id)
        logger.info("Cleared cart", extra={"session_id": self.session_id})

    def apply_coupon(self, coupon_code: str):
        # No coupons are configured; every code is rejected
        logger.warning("Rejected coupon code", extra={
            "session_id": self.session_id,
            "coupon_code": coupon_code,
        })
        raise InvalidCouponError(coupon_code)
