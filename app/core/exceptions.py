"""
Domain exceptions for the store.

Services raise these instead of HTTP errors; ``app.main`` renders every
``StoreError`` as a JSON error envelope using the class's ``status_code``.
"""
from typing import Any, Dict, Optional


class StoreError(Exception):
    """
    Base exception for all store errors.

    Attributes:
        message: Human-readable error message returned to the client
        details: Optional dict with additional context (ids, fields, ...)
    """

    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        if self.details:
            details_str = ', '.join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


class ValidationError(StoreError):
    """Raised when request input is missing or malformed."""

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message, details={'errors': errors or {}})
        self.errors = errors or {}


# Catalog

class ProductNotFoundError(StoreError):
    status_code = 404

    def __init__(self, product_id: int):
        super().__init__("Product not found", details={'product_id': product_id})
        self.product_id = product_id


class ProductUnavailableError(StoreError):
    """Raised when an inactive product is added to the cart."""

    def __init__(self, product_id: int, name: str):
        super().__init__(f"{name} is not available", details={'product_id': product_id})
        self.product_id = product_id


class InsufficientStockError(StoreError):
    def __init__(self, product_id: int, name: str, available: int):
        super().__init__(
            f"Only {available} of {name} available in stock",
            details={'product_id': product_id, 'available': available}
        )
        self.product_id = product_id
        self.available = available


# Cart

class CartItemNotFoundError(StoreError):
    status_code = 404

    def __init__(self, product_id: int):
        super().__init__("Item is not in the cart", details={'product_id': product_id})
        self.product_id = product_id


class EmptyCartError(StoreError):
    """Raised when trying to checkout with an empty cart."""

    def __init__(self, session_id: str):
        super().__init__("Cart is empty", details={'session_id': session_id})
        self.session_id = session_id


class InvalidCouponError(StoreError):
    def __init__(self, coupon_code: str):
        super().__init__("Invalid coupon code", details={'coupon_code': coupon_code})
        self.coupon_code = coupon_code


# Shipping

class UnsupportedCountryError(StoreError):
    def __init__(self, country: str):
        super().__init__(
            f"Shipping to {country} is not supported",
            details={'country': country}
        )
        self.country = country


class InvalidPostalCodeError(StoreError):
    def __init__(self, zip_code: str, country: str, reason: str):
        super().__init__(reason, details={'zip_code': zip_code, 'country': country})
        self.zip_code = zip_code
        self.country = country


# Orders

class OrderNotFoundError(StoreError):
    status_code = 404

    def __init__(self, order_id: int):
        super().__init__("Order not found", details={'order_id': order_id})
        self.order_id = order_id
