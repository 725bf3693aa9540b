"""Catalog router - FastAPI endpoints for services and products"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import require_admin
from ...database import get_db
from ...models import User
from .schemas import (
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    ServiceCreate,
    ServiceResponse,
    ServiceUpdate,
)
from .service import CatalogService, to_product_response

router = APIRouter(tags=["Catalog"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


# ============================================================================
# SERVICES
# ============================================================================


@router.get("/services", response_model=list[ServiceResponse])
async def list_services(service: CatalogService = Depends(get_catalog_service)):
    """Get all bookable services"""
    return service.get_services()


@router.get("/services/{service_id}", response_model=ServiceResponse)
async def get_service(service_id: int, service: CatalogService = Depends(get_catalog_service)):
    return service.get_service(service_id)


@router.post("/services", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    _admin: User = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    """Create a service (admin)"""
    return service.create_service(data)


@router.patch("/services/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: int,
    data: ServiceUpdate,
    _admin: User = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    """Update a service (admin)"""
    return service.update_service(service_id, data)


@router.delete("/services/{service_id}")
async def delete_service(
    service_id: int,
    _admin: User = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    """Delete a service without appointment history (admin)"""
    return service.delete_service(service_id)


# ============================================================================
# PRODUCTS
# ============================================================================


@router.get("/products", response_model=list[ProductResponse])
async def list_products(service: CatalogService = Depends(get_catalog_service)):
    """Get all shop products with current stock"""
    return [to_product_response(p) for p in service.get_products()]


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, service: CatalogService = Depends(get_catalog_service)):
    return to_product_response(service.get_product(product_id))


@router.post("/products", response_model=ProductResponse, status_code=201)
async def create_product(
    data: ProductCreate,
    _admin: User = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    """Create a product (admin)"""
    return to_product_response(service.create_product(data))


@router.patch("/products/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    data: ProductUpdate,
    _admin: User = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    """Update a product (admin)"""
    return to_product_response(service.update_product(product_id, data))


@router.delete("/products/{product_id}")
async def delete_product(
    product_id: int,
    _admin: User = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    """Delete a product (admin)"""
    return service.delete_product(product_id)
