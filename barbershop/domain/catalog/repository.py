"""Catalog repository - Database operations for services and products"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Appointment, CartItem, Product, Service


class CatalogRepository:
    """Repository for service and product database operations"""

    # Services
    @staticmethod
    def get_services(db: Session) -> list[Service]:
        return db.query(Service).order_by(Service.name.asc()).all()

    @staticmethod
    def get_service_by_id(db: Session, service_id: int) -> Optional[Service]:
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def service_has_appointments(db: Session, service_id: int) -> bool:
        return (
            db.query(Appointment.id).filter(Appointment.service_id == service_id).first()
            is not None
        )

    # Products
    @staticmethod
    def get_products(db: Session) -> list[Product]:
        return db.query(Product).order_by(Product.name.asc()).all()

    @staticmethod
    def get_product_by_id(db: Session, product_id: int) -> Optional[Product]:
        return db.query(Product).filter(Product.id == product_id).first()

    # Shared
    @staticmethod
    def create(db: Session, model, **fields):
        """Create a catalog record"""
        record = model(**fields)
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def update(db: Session, record, **updates):
        """Update a catalog record with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(record, key):
                setattr(record, key, value)

        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def delete(db: Session, record) -> None:
        """Delete a catalog record along with any cart lines pointing at it"""
        if isinstance(record, Product):
            db.query(CartItem).filter(CartItem.product_id == record.id).delete(
                synchronize_session=False
            )
        elif isinstance(record, Service):
            db.query(CartItem).filter(CartItem.service_id == record.id).delete(
                synchronize_session=False
            )
        db.delete(record)
        db.commit()
