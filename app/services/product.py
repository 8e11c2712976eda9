import logging
from typing import List, Optional
from datetime import datetime, timezone
from sqlmodel import Session, select

from app.core.exceptions import ProductNotFoundError
from app.models.product import Product

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, session: Session):
        self.session = session

    def list_products(self, is_active: Optional[bool] = None) -> List[Product]:
        query = select(Product)
        if is_active is not None:
            query = query.where(Product.is_active == is_active)
        return self.session.exec(query.order_by(Product.id)).all()

    def get_product(self, product_id: int) -> Product:
        product = self.session.get(Product, product_id)
        if not product:
            raise ProductNotFoundError(product_id)
        return product

    def create_product(self, data: dict) -> Product:
        product = Product(**data)
        self.session.add(product)
        self.session.commit()
        self.session.refresh(product)
        logger.info("Product created", extra={"product_id": product.id})
        return product

    def update_product(self, product_id: int, data: dict) -> Product:
        product = self.get_product(product_id)
        for field, value in data.items():
            setattr(product, field, value)
        product.updated_at = datetime.now(timezone.utc)
        self.session.add(product)
        self.session.commit()
        self.session.refresh(product)
        logger.info("Product updated", extra={"product_id": product.id, "fields": sorted(data)})
        return product

    def delete_product(self, product_id: int):
        product = self.get_product(product_id)
        self.session.delete(product)
        self.session.commit()
        logger.info("Product deleted", extra={"product_id": product_id})
