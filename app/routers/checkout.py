from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session
from app.db.session import get_session
from app.models.user import User
from app.routers.auth import get_current_user_optional
from app.routers.cart import get_cart_store, get_session_id
from app.services.cart_store import CartStore
from app.services.checkout import CheckoutService

router = APIRouter()

class ShippingAddress(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip: str = Field(min_length=1)
    country: str = Field(min_length=1)

class CheckoutRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    shipping_address: ShippingAddress
    payment_method: str = Field(min_length=1)

def get_checkout_service(
    session: Session = Depends(get_session),
    store: CartStore = Depends(get_cart_store)
) -> CheckoutService:
    return CheckoutService(session, store)

@router.post("")
def checkout(
    checkout_in: CheckoutRequest,
    session_id: str = Depends(get_session_id),
    current_user: Optional[User] = Depends(get_current_user_optional),
    service: CheckoutService = Depends(get_checkout_service)
):
    """Place an order from the session cart"""
    order = service.checkout(
        session_id,
        shipping_address=checkout_in.shipping_address.model_dump(),
        payment_method=checkout_in.payment_method,
        user_id=current_user.id if current_user else None,
    )
    return {"success": "Order placed successfully", "order_id": order.id}
