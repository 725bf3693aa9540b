"""Cart repository - Database operations for cart lines"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import CartItem, Product


class CartRepository:
    """Repository for cart database operations"""

    @staticmethod
    def get_items(db: Session, user_id: int) -> list[CartItem]:
        return (
            db.query(CartItem)
            .options(joinedload(CartItem.product), joinedload(CartItem.service))
            .filter(CartItem.user_id == user_id)
            .order_by(CartItem.id.asc())
            .all()
        )

    @staticmethod
    def get_item(db: Session, item_id: int, user_id: int) -> Optional[CartItem]:
        return (
            db.query(CartItem)
            .filter(CartItem.id == item_id, CartItem.user_id == user_id)
            .first()
        )

    @staticmethod
    def find_product_line(db: Session, user_id: int, product_id: int) -> Optional[CartItem]:
        return (
            db.query(CartItem)
            .filter(
                CartItem.user_id == user_id,
                CartItem.item_type == "product",
                CartItem.product_id == product_id,
            )
            .first()
        )

    @staticmethod
    def find_slot_line(db: Session, user_id: int, day: date, time_label: str) -> Optional[CartItem]:
        """Any service line of the user already holding this slot"""
        return (
            db.query(CartItem)
            .filter(
                CartItem.user_id == user_id,
                CartItem.item_type == "service",
                CartItem.date == day,
                CartItem.time == time_label,
            )
            .first()
        )

    @staticmethod
    def get_product_for_update(db: Session, product_id: int) -> Optional[Product]:
        """Lock the product row while its stock is changed"""
        return db.query(Product).filter(Product.id == product_id).with_for_update().first()

    @staticmethod
    def add_item(db: Session, user_id: int, **fields) -> CartItem:
        item = CartItem(user_id=user_id, **fields)
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def set_quantity(db: Session, item: CartItem, quantity: int) -> CartItem:
        item.quantity = quantity
        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def delete_item(db: Session, item: CartItem) -> None:
        db.delete(item)
        db.commit()

    @staticmethod
    def clear(db: Session, user_id: int, commit: bool = True) -> int:
        """Delete every cart line of a user, returning how many were removed"""
        removed = (
            db.query(CartItem)
            .filter(CartItem.user_id == user_id)
            .delete(synchronize_session=False)
        )
        if commit:
            db.commit()
        return removed
