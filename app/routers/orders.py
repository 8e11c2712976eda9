from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session
from app.db.session import get_session
from app.models.user import User
from app.routers.auth import get_current_user
from app.services.order import OrderService

router = APIRouter()

def get_order_service(session: Session = Depends(get_session)) -> OrderService:
    return OrderService(session)

@router.get("")
def list_orders(
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """Orders of the current user, newest first; admins see every order"""
    if current_user.is_superuser:
        orders = service.get_all_orders()
    else:
        orders = service.get_user_orders(current_user.id)
    return {"orders": [service.serialize(order) for order in orders]}

@router.get("/{id}")
def get_order(
    id: int,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    order = service.get_order(id)

    # Owners and admins only; guest orders are visible to admins
    if order.user_id != current_user.id and not current_user.is_superuser:
        raise HTTPException(status_code=403, detail="Not authorized")

    return {"order": service.serialize(order)}
