from fastapi import APIRouter, Depends
from sqlmodel import Session
from app.db.session import get_session
from app.models.product import Product
from app.routers.cart import get_cart_service, cart_payload
from app.services.cart import CartService
from app.services.product import ProductService

router = APIRouter()

def get_product_service(session: Session = Depends(get_session)) -> ProductService:
    return ProductService(session)

@router.get("/")
def catalog(
    service: ProductService = Depends(get_product_service),
    cart_service: CartService = Depends(get_cart_service)
):
    """Active products alongside the visitor's cart"""
    products = service.list_products(is_active=True)
    cart = cart_payload(cart_service.get_cart())
    return {
        "products": [product.model_dump(mode="json") for product in products],
        "cart": cart["cartItems"],
        "cartCount": cart["cartCount"],
    }

@router.get("/products/{product_id}", response_model=Product)
def read_product(product_id: int, service: ProductService = Depends(get_product_service)):
    return service.get_product(product_id)
