from typing import Optional
from decimal import Decimal
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field, HttpUrl
from sqlmodel import Session
from app.core.exceptions import ValidationError
from app.db.session import get_session
from app.models.order import OrderStatus
from app.models.product import Product
from app.routers.auth import get_current_admin
from app.services.order import OrderService
from app.services.product import ProductService

router = APIRouter(dependencies=[Depends(get_current_admin)])

NON_NULLABLE_PRODUCT_FIELDS = ("name", "description", "price", "stock_quantity", "is_active")

# Pydantic models for requests
class ProductCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    image_url: Optional[HttpUrl] = None
    stock_quantity: int = Field(ge=0)
    category: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = True

class ProductUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    image_url: Optional[HttpUrl] = None
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    category: Optional[str] = Field(default=None, max_length=255)
    is_active: Optional[bool] = None

class OrderStatusUpdate(BaseModel):
    status: OrderStatus

def get_product_service(session: Session = Depends(get_session)) -> ProductService:
    return ProductService(session)

def get_order_service(session: Session = Depends(get_session)) -> OrderService:
    return OrderService(session)

def _product_data(data: dict) -> dict:
    """Store image_url in HttpUrl's normalized form, e.g. a bare host gains a trailing slash."""
    if data.get("image_url") is not None:
        data["image_url"] = str(data["image_url"])
    return data

# Product CRUD endpoints
@router.get("/products")
def get_products(
    is_active: Optional[bool] = None,
    service: ProductService = Depends(get_product_service)
):
    """All products, optionally filtered by active flag"""
    products = service.list_products(is_active=is_active)
    return {
        "products": [product.model_dump(mode="json") for product in products],
        "total": len(products),
    }

@router.post("/products", response_model=Product, status_code=201)
def create_product(product_in: ProductCreate, service: ProductService = Depends(get_product_service)):
    return service.create_product(_product_data(product_in.model_dump()))

@router.patch("/products/{product_id}", response_model=Product)
def update_product(
    product_id: int,
    product_in: ProductUpdate,
    service: ProductService = Depends(get_product_service)
):
    """Update the fields present in the body"""
    data = product_in.model_dump(exclude_unset=True)
    errors = {
        field: "This field cannot be null"
        for field in NON_NULLABLE_PRODUCT_FIELDS
        if field in data and data[field] is None
    }
    if errors:
        raise ValidationError("The given data was invalid.", errors)
    return service.update_product(product_id, _product_data(data))

@router.delete("/products/{product_id}")
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    service.delete_product(product_id)
    return {"success": "Product deleted successfully."}

# Order endpoints
@router.get("/orders")
def get_orders(
    status: Optional[OrderStatus] = None,
    service: OrderService = Depends(get_order_service)
):
    """All orders, newest first"""
    orders = service.get_all_orders(status=status)
    return {"orders": [service.serialize(order) for order in orders]}

@router.patch("/orders/{order_id}/status")
def update_order_status(
    order_id: int,
    status_update: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service)
):
    order = service.update_status(order_id, status_update.status)
    return {"success": "Order status updated successfully.", "order": service.serialize(order)}
