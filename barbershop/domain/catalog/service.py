"""Catalog service - Business logic for services and products"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Product, Service
from ...utils.sanitization import clean_text
from .repository import CatalogRepository
from .schemas import ProductCreate, ProductResponse, ProductUpdate, ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


def to_product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        image=product.image,
        quantity=product.quantity,
        soldQuantity=product.sold_quantity or 0,
    )


def _clean_text_fields(fields: dict) -> dict:
    """Normalize free-text fields before they are stored"""
    cleaned = dict(fields)
    try:
        if cleaned.get("name") is not None:
            cleaned["name"] = clean_text(cleaned["name"], max_length=255)
        if cleaned.get("description") is not None:
            cleaned["description"] = clean_text(
                cleaned["description"], max_length=2000
            )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return cleaned


class CatalogService:
    """Service layer for the service and product catalog"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CatalogRepository()

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    def get_services(self) -> list[Service]:
        return self.repo.get_services(self.db)

    def get_service(self, service_id: int) -> Service:
        service = self.repo.get_service_by_id(self.db, service_id)
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    def create_service(self, data: ServiceCreate) -> Service:
        fields = _clean_text_fields(data.model_dump())
        try:
            service = self.repo.create(self.db, Service, **fields)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create service: {e}")
            raise HTTPException(status_code=500, detail="Operation failed") from e
        logger.info(f"✂️ Service {service.id} created: {service.name}")
        return service

    def update_service(self, service_id: int, data: ServiceUpdate) -> Service:
        service = self.get_service(service_id)
        fields = _clean_text_fields(data.model_dump(exclude_unset=True))
        try:
            return self.repo.update(self.db, service, **fields)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update service {service_id}: {e}")
            raise HTTPException(status_code=500, detail="Operation failed") from e

    def delete_service(self, service_id: int) -> dict:
        service = self.get_service(service_id)
        if self.repo.service_has_appointments(self.db, service_id):
            raise HTTPException(
                status_code=409,
                detail="Service has appointment history and cannot be deleted",
            )
        self.repo.delete(self.db, service)
        logger.info(f"🗑️ Service {service_id} deleted")
        return {"success": True, "message": "Service deleted."}

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def get_products(self) -> list[Product]:
        return self.repo.get_products(self.db)

    def get_product(self, product_id: int) -> Product:
        product = self.repo.get_product_by_id(self.db, product_id)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        return product

    def create_product(self, data: ProductCreate) -> Product:
        fields = _clean_text_fields(data.model_dump())
        try:
            product = self.repo.create(self.db, Product, sold_quantity=0, **fields)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create product: {e}")
            raise HTTPException(status_code=500, detail="Operation failed") from e
        logger.info(f"🧴 Product {product.id} created: {product.name}")
        return product

    def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        product = self.get_product(product_id)
        fields = _clean_text_fields(data.model_dump(exclude_unset=True))
        try:
            return self.repo.update(self.db, product, **fields)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update product {product_id}: {e}")
            raise HTTPException(status_code=500, detail="Operation failed") from e

    def delete_product(self, product_id: int) -> dict:
        product = self.get_product(product_id)
        self.repo.delete(self.db, product)
        logger.info(f"🗑️ Product {product_id} deleted")
        return {"success": True, "message": "Product deleted."}
