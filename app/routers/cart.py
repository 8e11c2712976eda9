import uuid
from typing import Optional
from fastapi import APIRouter, Depends, Header, Request, Response
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session
from app.core.config import settings
from app.core.exceptions import ValidationError
from app.db.session import get_session
from app.models.cart import Cart
from app.services.cart import CartService
from app.services.cart_store import CartStore, DatabaseCartStore
from app.services.shipping import ShippingEstimate, ShippingService

router = APIRouter()

MAX_SESSION_ID_LENGTH = 64

class CartItemAdd(BaseModel):
    product_id: int
    quantity: int = Field(default=1, ge=1)

class CartItemUpdate(BaseModel):
    product_id: int
    quantity: int

class CartItemRemove(BaseModel):
    product_id: int

class CouponApply(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    coupon_code: str = Field(min_length=1)

class ShippingEstimateRequest(BaseModel):
    zip_code: Optional[str] = None
    country: Optional[str] = None

def get_session_id(
    request: Request,
    response: Response,
    x_session_id: Optional[str] = Header(None, alias="X-Session-ID")
) -> str:
    """Session id from the X-Session-ID header or cookie; a new one is issued otherwise."""
    session_id = x_session_id or request.cookies.get(settings.SESSION_COOKIE_NAME)
    if session_id and len(session_id) > MAX_SESSION_ID_LENGTH:
        raise ValidationError("Invalid session id", {"session_id": "Session id is too long"})
    if not session_id:
        session_id = uuid.uuid4().hex
    response.set_cookie(settings.SESSION_COOKIE_NAME, session_id, httponly=True, samesite="lax")
    return session_id

def get_cart_store(request: Request, session: Session = Depends(get_session)) -> CartStore:
    if settings.CART_STORE == "memory":
        return request.app.state.cart_store
    return DatabaseCartStore(session)

def get_cart_service(
    session: Session = Depends(get_session),
    store: CartStore = Depends(get_cart_store),
    session_id: str = Depends(get_session_id)
) -> CartService:
    return CartService(session, store, session_id)

def get_shipping_service() -> ShippingService:
    return ShippingService()

def cart_payload(cart: Cart) -> dict:
    data = cart.model_dump(mode="json")
    return {
        "cartItems": data["items"],
        "cartCount": data["count"],
        "total": data["total"],
    }

@router.get("")
def get_cart(service: CartService = Depends(get_cart_service)):
    """Get the session cart"""
    return cart_payload(service.get_cart())

@router.post("/add")
def add_to_cart(item: CartItemAdd, service: CartService = Depends(get_cart_service)):
    """Add item to cart"""
    cart = service.add(item.product_id, item.quantity)
    return {"success": "Product added to cart successfully!", **cart_payload(cart)}

@router.delete("/remove")
def remove_from_cart(item: CartItemRemove, service: CartService = Depends(get_cart_service)):
    """Remove item from cart; absent items are ignored"""
    cart = service.remove(item.product_id)
    return {"success": "Item removed from cart", **cart_payload(cart)}

@router.patch("/update")
def update_cart_quantity(item: CartItemUpdate, service: CartService = Depends(get_cart_service)):
    """Update cart item quantity; zero removes the item"""
    cart = service.update(item.product_id, item.quantity)
    return {"success": "Cart updated", **cart_payload(cart)}

@router.delete("/clear")
def clear_cart(service: CartService = Depends(get_cart_service)):
    """Clear entire cart"""
    service.clear()
    return {"success": "Cart cleared", **cart_payload(Cart())}

@router.post("/apply-coupon")
def apply_coupon(data: CouponApply, service: CartService = Depends(get_cart_service)):
    service.apply_coupon(data.coupon_code)

@router.post("/estimate-shipping", response_model=ShippingEstimate)
def estimate_shipping(
    data: ShippingEstimateRequest,
    service: CartService = Depends(get_cart_service),
    shipping: ShippingService = Depends(get_shipping_service)
):
    """Flat-rate shipping options for a destination"""
    return shipping.estimate(data.zip_code, data.country, cart=service.get_cart())
